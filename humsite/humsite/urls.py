"""
URL configuration for humsite project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from HUMPIZZA import views

# Router cho ViewSets (không có dấu / ở cuối, giống client gọi)
router = DefaultRouter(trailing_slash=False)
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'customization-schemas', views.CustomizationSchemaViewSet, basename='customization-schema')
router.register(r'menu-items', views.MenuItemViewSet, basename='menu-item')
router.register(r'orders', views.OrderViewSet, basename='order')
router.register(r'reservations', views.ReservationViewSet, basename='reservation')
router.register(r'notifications', views.NotificationViewSet, basename='notification')
router.register(r'blog-posts', views.BlogPostViewSet, basename='blog-post')
router.register(r'customer-reviews', views.CustomerReviewViewSet, basename='customer-review')

urlpatterns = [
    path('admin/', admin.site.urls),

    # Auth APIs
    path('api/auth/login', views.login, name='login'),
    path('api/admin/logout', views.logout, name='admin-logout'),
    path('api/staff/logout', views.logout, name='staff-logout'),
    path('api/admin/me', views.current_admin, name='admin-me'),
    path('api/staff/me', views.current_staff, name='staff-me'),
    path('api/admin/profile', views.update_profile, name='admin-profile'),
    path('api/admin/users', views.users, name='admin-users'),
    path('api/admin/users/<int:pk>', views.user_detail, name='admin-user-detail'),

    # Upload APIs
    path('api/media/upload-image', views.upload_image, name='upload-image'),
    path('api/upload-hero-video', views.upload_hero_video, name='upload-hero-video'),
    path('api/save-hero-video', views.save_hero_video, name='save-hero-video'),
    path('api/objects/upload', views.object_upload_url, name='object-upload'),
    path('api/objects/put/<str:token>', views.object_put, name='object-put'),
    path('api/assets/<str:filename>', views.serve_asset, name='asset'),

    # Home content + video hero
    path('api/home-content', views.home_content, name='home-content'),
    path('api/cancel-pending-videos', views.cancel_pending_videos, name='cancel-pending-videos'),
    path('api/hero-videos/status', views.hero_videos_status, name='hero-videos-status'),

    # SEO
    path('api/seo/pages', views.seo_pages, name='seo-pages'),
    path('api/seo/pages/<str:page_key>/<str:language>', views.seo_page_detail, name='seo-page-detail'),

    path('api/notifications/clear-read', views.clear_read_notifications, name='clear-read-notifications'),

    # API endpoints từ Router
    path('api/', include(router.urls)),

    path('sitemap.xml', views.sitemap, name='sitemap'),
    path('robots.txt', views.robots, name='robots'),
]

# Ảnh món ăn (ImageField) khi chạy runserver
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
