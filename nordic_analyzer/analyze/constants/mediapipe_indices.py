# MediaPipe Pose landmark indices
NOSE                     = 0
L_SHOULDER, R_SHOULDER = 11, 12
L_ELBOW,   R_ELBOW     = 13, 14
L_WRIST,   R_WRIST     = 15, 16
L_PINKY,   R_PINKY     = 17, 18
L_INDEX,   R_INDEX     = 19, 20
L_THUMB,   R_THUMB     = 21, 22
L_HIP,     R_HIP       = 23, 24
L_KNEE,    R_KNEE      = 25, 26
L_ANKLE,   R_ANKLE     = 27, 28

NUM_LANDMARKS = 33

# Triplets for joint angles (a, vertex, c)
LEFT_ARM = (L_SHOULDER, L_ELBOW, L_WRIST)
LEFT_HIP_EXT = (L_SHOULDER, L_HIP, L_KNEE)

# 팔 단위 인덱스 묶음 (side → landmark)
ARM_LANDMARKS = {
    "left": {
        "shoulder": L_SHOULDER, "elbow": L_ELBOW, "wrist": L_WRIST,
        "pinky": L_PINKY, "index": L_INDEX, "thumb": L_THUMB, "hip": L_HIP,
    },
    "right": {
        "shoulder": R_SHOULDER, "elbow": R_ELBOW, "wrist": R_WRIST,
        "pinky": R_PINKY, "index": R_INDEX, "thumb": R_THUMB, "hip": R_HIP,
    },
}

# 질량중심 가중치 (총합 1.0)
COM_WEIGHTS = {
    NOSE: 0.08,
    L_SHOULDER: 0.05, R_SHOULDER: 0.05,
    L_ELBOW: 0.05,    R_ELBOW: 0.05,
    L_HIP: 0.25,      R_HIP: 0.25,
    L_KNEE: 0.08,     R_KNEE: 0.08,
}
