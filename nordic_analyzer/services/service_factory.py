from nordic_analyzer.domain.angle.calculator import AngleCalculator
from nordic_analyzer.domain.com.estimator import CenterOfMassEstimator
from nordic_analyzer.domain.grip.classifier import GripPhaseClassifier
from nordic_analyzer.domain.pole.estimator import PoleEstimator, get_pole_strategy
from nordic_analyzer.domain.stride.estimator import StrideEstimator
from nordic_analyzer.schemas.session_dto import PipelineConfig
from nordic_analyzer.services.gait_analysis_service import GaitAnalysisService


def create_gait_analysis_service(config: PipelineConfig) -> GaitAnalysisService:
    """
    GaitAnalysisService 인스턴스 생성

    Args:
        config: 세션 설정 (시점, 보정값, 폴/체간 전략, 그립 가중치)

    Returns:
        GaitAnalysisService 인스턴스
    """
    # Domain 컴포넌트 초기화
    angle_calculator = AngleCalculator(trunk_lean=config.trunk_lean_convention)
    com_estimator = CenterOfMassEstimator()
    stride_estimator = StrideEstimator(
        frame_width=config.frame_width,
        pixels_per_cm=config.pixels_per_cm,
    )
    pole_strategy = get_pole_strategy(
        config.pole_strategy,
        frame_width=config.frame_width,
        frame_height=config.frame_height,
        grip_blend=config.grip_blend,
    )
    pole_estimator = PoleEstimator(strategy=pole_strategy, pixels_per_cm=config.pixels_per_cm)
    grip_classifier = GripPhaseClassifier()

    return GaitAnalysisService(
        config=config,
        angle_calculator=angle_calculator,
        com_estimator=com_estimator,
        stride_estimator=stride_estimator,
        pole_estimator=pole_estimator,
        grip_classifier=grip_classifier,
    )
