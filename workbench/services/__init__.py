"""서비스 레이어 패키지 - 비즈니스 로직 관리"""

from .project_service import ProjectService

__all__ = [
    'ProjectService',
]
