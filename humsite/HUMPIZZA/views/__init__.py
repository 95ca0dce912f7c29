from .auth_views import current_admin, current_staff, login, logout, update_profile, user_detail, users
from .content_views import (
    BlogPostViewSet, CustomerReviewViewSet, cancel_pending_videos, hero_videos_status,
    home_content, robots, seo_page_detail, seo_pages, sitemap,
)
from .media_views import (
    object_put, object_upload_url, save_hero_video, serve_asset, upload_hero_video, upload_image,
)
from .menu_views import CategoryViewSet, CustomizationSchemaViewSet, MenuItemViewSet
from .order_views import NotificationViewSet, OrderViewSet, ReservationViewSet, clear_read_notifications
