# Fallback defaults (settings에서 ENV 미지정 시 사용)
DEFAULT_PIXELS_PER_CM = 5.0
DEFAULT_FRAME_WIDTH = 1280
DEFAULT_FRAME_HEIGHT = 720
DEFAULT_GRIP_BLEND = 0.3  # 손목 70% / 엄지 30%

# 고정 임계값
VISIBILITY_THRESHOLD = 0.5
GRIP_THRESHOLD = 0.6
PHASE_DEADBAND = 0.05
FALLBACK_FORWARD_MIN = 0.1
FALLBACK_BACKWARD_MAX = -0.05

# 보폭 유효 범위 (cm, 양 끝 제외)
STRIDE_MIN_CM = 20.0
STRIDE_MAX_CM = 150.0

# 시계열 관리
HISTORY_CAP = 300         # 30fps 기준 약 10초
COM_TRAIL_WINDOW_MS = 500.0
NOMINAL_FPS = 30

# 폴 접지점 오프셋 (프레임 폭 대비 비율)
POLE_OFFSET_FORWARD = 0.15
POLE_OFFSET_BACKWARD = 0.25
POLE_FOREARM_OFFSET_FORWARD = 18.0
POLE_FOREARM_OFFSET_BACKWARD = -12.0
POLE_RECOMMENDED_RANGE = (30, 50)

# 각도 상태 판정 허용폭 (정상 범위 폭 대비)
STATUS_TOLERANCE_RATIO = 0.2

# 모든 시점의 각도 키 (시점과 무관하게 각도 맵에 항상 포함)
ANGLE_KEYS = (
    "armSwing",
    "shoulderRotation",
    "trunkLean",
    "hipExtension",
    "frontSwingAngle",
    "backSwingAngle",
    "lateralTrunkLean",
)

# 폴 통계 키
POLE_STAT_KEYS = ("left_touch_angle", "right_touch_angle", "pole_stride_position")
