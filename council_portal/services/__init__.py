"""Services package for business logic and data migration"""

from .permission_service import PermissionService
from .reference_resolver import ReferenceResolver
from .migration_service import (
    DataMigrationService,
    SnapshotReader,
    BulkEraser,
    SnapshotImporter,
    ImportOptions,
    ImportResult,
    TableStats,
    EraseReport,
)
from .auth_service import AuthService
from .user_admin_service import UserAdminService
from .council_member_service import CouncilMemberService
from .question_service import QuestionService
from .like_service import LikeService
from .news_service import NewsService
from .slideshow_service import SlideshowService
from .faq_service import FAQService
from .contact_service import ContactService
from .demographic_service import DemographicService
from .image_service import ImageService
from .sample_data_service import SampleDataService

__all__ = [
    "PermissionService",
    "ReferenceResolver",
    "DataMigrationService",
    "SnapshotReader",
    "BulkEraser",
    "SnapshotImporter",
    "ImportOptions",
    "ImportResult",
    "TableStats",
    "EraseReport",
    "AuthService",
    "UserAdminService",
    "CouncilMemberService",
    "QuestionService",
    "LikeService",
    "NewsService",
    "SlideshowService",
    "FAQService",
    "ContactService",
    "DemographicService",
    "ImageService",
    "SampleDataService",
]
