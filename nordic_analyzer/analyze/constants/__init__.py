# re-exports: 다른 모듈에서 짧게 import 하도록

from .mediapipe_indices import (
    NOSE, L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_PINKY, R_PINKY, L_INDEX, R_INDEX, L_THUMB, R_THUMB,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE, NUM_LANDMARKS,
    LEFT_ARM, LEFT_HIP_EXT, ARM_LANDMARKS, COM_WEIGHTS,
)

from .model_params import (
    DEFAULT_PIXELS_PER_CM,
    DEFAULT_FRAME_WIDTH,
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_GRIP_BLEND,
    VISIBILITY_THRESHOLD,
    GRIP_THRESHOLD,
    PHASE_DEADBAND,
    FALLBACK_FORWARD_MIN,
    FALLBACK_BACKWARD_MAX,
    STRIDE_MIN_CM,
    STRIDE_MAX_CM,
    HISTORY_CAP,
    COM_TRAIL_WINDOW_MS,
    NOMINAL_FPS,
    POLE_OFFSET_FORWARD,
    POLE_OFFSET_BACKWARD,
    POLE_FOREARM_OFFSET_FORWARD,
    POLE_FOREARM_OFFSET_BACKWARD,
    POLE_RECOMMENDED_RANGE,
    STATUS_TOLERANCE_RATIO,
    ANGLE_KEYS,
    POLE_STAT_KEYS,
)
