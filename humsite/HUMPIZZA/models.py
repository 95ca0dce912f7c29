from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone

# Giới hạn số mục được ghim lên trang chủ (món ăn, tin tức, đánh giá)
MAX_PINNED = 4


# 1. PROFILE - Thông tin tài khoản quản trị / nhân viên
class Profile(models.Model):
    ROLE_CHOICES = [
        ('admin', 'Quản trị'),
        ('staff', 'Nhân viên'),
        ('customer', 'Khách hàng'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='customer')
    permissions = models.JSONField(default=list, blank=True)
    full_name = models.CharField(max_length=150, blank=True, default='')

    class Meta:
        db_table = 'profiles'
        verbose_name = 'Tài khoản'
        verbose_name_plural = 'Tài khoản'

    def __str__(self):
        return f"{self.user.username} ({self.role})"


def get_profile(user):
    profile, _ = Profile.objects.get_or_create(
        user=user,
        defaults={'role': 'admin' if user.is_superuser else ('staff' if user.is_staff else 'customer')},
    )
    return profile


def get_role(user):
    """Superuser luôn là admin, còn lại lấy theo Profile"""
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return 'admin'
    return get_profile(user).role


# 2. CATEGORIES - Danh mục món ăn
class Category(models.Model):
    name = models.CharField(max_length=100)
    name_vi = models.CharField(max_length=100, blank=True, default='')
    description = models.TextField(blank=True, default='')
    sort_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'categories'
        ordering = ['sort_order', 'id']
        verbose_name = 'Danh mục'
        verbose_name_plural = 'Danh mục'

    def __str__(self):
        return self.name


# 3. CUSTOMIZATION SCHEMAS - Tùy chọn món (nửa-nửa, size, topping...)
class CustomizationSchema(models.Model):
    name = models.CharField(max_length=150)
    name_vi = models.CharField(max_length=150, blank=True, default='')
    type = models.CharField(max_length=50)  # half_and_half, size_selection, toppings
    description = models.TextField(blank=True, default='')
    description_vi = models.TextField(blank=True, default='')
    options = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customization_schemas'
        verbose_name = 'Tùy chọn món'
        verbose_name_plural = 'Tùy chọn món'

    def __str__(self):
        return self.name


# 4. MENU ITEMS - Món ăn
class MenuItem(models.Model):
    category = models.ForeignKey(
        Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='items'
    )
    name = models.CharField(max_length=255)
    name_vi = models.CharField(max_length=255, blank=True, default='')
    description = models.TextField(blank=True, default='')
    description_vi = models.TextField(blank=True, default='')
    price = models.IntegerField()  # VND
    vat_rate = models.PositiveSmallIntegerField(default=0)  # %
    image = models.ImageField(upload_to='menu/', null=True, blank=True)
    image_url = models.CharField(max_length=500, blank=True, default='')
    is_available = models.BooleanField(default=True)
    is_pinned = models.BooleanField(default=False)
    pinned_at = models.DateTimeField(null=True, blank=True)
    customization_schemas = models.ManyToManyField(
        CustomizationSchema, through='MenuItemSchema', blank=True, related_name='menu_items'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'menu_items'
        ordering = ['category__sort_order', 'name']
        verbose_name = 'Món ăn'
        verbose_name_plural = 'Món ăn'

    def __str__(self):
        return self.name

    def toggle_pin(self):
        self.is_pinned = not self.is_pinned
        self.pinned_at = timezone.now() if self.is_pinned else None
        self.save(update_fields=['is_pinned', 'pinned_at'])
        return self


class MenuItemSchema(models.Model):
    menu_item = models.ForeignKey(MenuItem, on_delete=models.CASCADE, related_name='schema_links')
    schema = models.ForeignKey(CustomizationSchema, on_delete=models.CASCADE, related_name='item_links')
    sort_order = models.IntegerField(default=0)
    is_required = models.BooleanField(default=False)

    class Meta:
        db_table = 'menu_item_customization_schemas'
        ordering = ['sort_order']
        unique_together = ('menu_item', 'schema')


# 5. RESERVATIONS - Yêu cầu đặt bàn
class Reservation(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Chờ xử lý'),
        ('confirmed', 'Đã xác nhận'),
        ('cancelled', 'Đã hủy'),
    ]

    name = models.CharField(max_length=100)
    email = models.EmailField(blank=True, default='')
    phone = models.CharField(max_length=20)
    date = models.DateField()
    time = models.TimeField()
    guests = models.PositiveIntegerField(default=1)
    special_requests = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reservations'
        ordering = ['-created_at']  # Yêu cầu mới nhất lên đầu

    def __str__(self):
        return f"{self.name} - {self.phone} ({self.status})"


# 6. ORDERS - Đơn hàng online (từ giỏ hàng)
class Order(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Chờ xử lý'),
        ('confirmed', 'Đã xác nhận'),
        ('preparing', 'Đang làm'),
        ('ready', 'Đã xong'),
        ('delivered', 'Đã giao'),
        ('cancelled', 'Đã hủy'),
    ]
    TYPE_CHOICES = [
        ('dine-in', 'Ăn tại quán'),
        ('takeout', 'Mang đi'),
        ('delivery', 'Giao hàng'),
    ]
    METHOD_CHOICES = [
        ('cash', 'Tiền mặt'),
        ('transfer', 'Chuyển khoản'),
    ]

    customer_name = models.CharField(max_length=100)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20)
    customer_address = models.TextField(blank=True, default='')
    total_amount = models.IntegerField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    order_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES, default='cash')
    special_instructions = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        verbose_name = 'Đơn hàng'
        verbose_name_plural = 'Đơn hàng'

    def __str__(self):
        return f"Đơn #{self.id} - {self.customer_name}"

    def recalculate_total(self):
        self.total_amount = sum(line.quantity * line.unit_price for line in self.items.all())
        self.save(update_fields=['total_amount'])
        return self.total_amount


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    menu_item = models.ForeignKey(MenuItem, on_delete=models.SET_NULL, null=True, related_name='order_items')
    name = models.CharField(max_length=255)
    unit_price = models.IntegerField()
    quantity = models.PositiveIntegerField(default=1)
    customization = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.order} - {self.name} x{self.quantity}"


# 7. NOTIFICATIONS - Thông báo cho dashboard
class Notification(models.Model):
    PRIORITY_CHOICES = [
        ('low', 'Thấp'),
        ('normal', 'Bình thường'),
        ('high', 'Cao'),
        ('urgent', 'Khẩn'),
    ]

    type = models.CharField(max_length=30)  # order, reservation, website_update
    title = models.CharField(max_length=200)
    title_vi = models.CharField(max_length=200, blank=True, default='')
    content = models.TextField()
    content_vi = models.TextField(blank=True, default='')
    customer_name = models.CharField(max_length=100, blank=True, default='')
    customer_phone = models.CharField(max_length=20, blank=True, default='')
    reference_id = models.CharField(max_length=50, blank=True, default='')
    reference_type = models.CharField(max_length=30, blank=True, default='')
    is_read = models.BooleanField(default=False)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='normal')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.type}] {self.title}"


# 8. BLOG POSTS - Tin tức
class BlogPost(models.Model):
    title = models.CharField(max_length=255)
    title_vi = models.CharField(max_length=255, blank=True, default='')
    excerpt = models.TextField()
    excerpt_vi = models.TextField(blank=True, default='')
    content = models.TextField()
    content_vi = models.TextField(blank=True, default='')
    image_url = models.CharField(max_length=500, blank=True, default='')
    cover_image_url = models.CharField(max_length=500, blank=True, default='')
    published = models.BooleanField(default=False)
    pinned = models.BooleanField(default=False)
    pin_order = models.PositiveSmallIntegerField(null=True, blank=True)
    meta_title = models.CharField(max_length=255, blank=True, default='')
    meta_title_vi = models.CharField(max_length=255, blank=True, default='')
    meta_description = models.TextField(blank=True, default='')
    meta_description_vi = models.TextField(blank=True, default='')
    slug = models.SlugField(max_length=255, blank=True, default='')
    slug_vi = models.SlugField(max_length=255, blank=True, default='')
    keywords = models.CharField(max_length=500, blank=True, default='')
    keywords_vi = models.CharField(max_length=500, blank=True, default='')
    canonical_url = models.CharField(max_length=500, blank=True, default='')
    og_image_url = models.CharField(max_length=500, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'blog_posts'
        ordering = ['-created_at']
        verbose_name = 'Tin tức'
        verbose_name_plural = 'Tin tức'

    def __str__(self):
        return self.title


# 9. CUSTOMER REVIEWS - Đánh giá khách hàng
class CustomerReview(models.Model):
    customer_name = models.CharField(max_length=100)
    customer_name_vi = models.CharField(max_length=100, blank=True, default='')
    customer_title = models.CharField(max_length=100)  # "Khách hàng", "Food Blogger"
    customer_title_vi = models.CharField(max_length=100, blank=True, default='')
    rating = models.PositiveSmallIntegerField(default=5)
    review = models.TextField()
    review_vi = models.TextField(blank=True, default='')
    avatar_url = models.CharField(max_length=500, blank=True, default='')
    is_published = models.BooleanField(default=False)
    is_pinned = models.BooleanField(default=False)
    pinned_at = models.DateTimeField(null=True, blank=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customer_reviews'
        ordering = ['display_order', '-created_at']

    def __str__(self):
        return f"{self.customer_name} ({self.rating}★)"


# 10. PAGE SEO - Meta/Open Graph theo trang + ngôn ngữ
class PageSeo(models.Model):
    page_key = models.CharField(max_length=50)  # home, menu, about, blog, contact, booking
    language = models.CharField(max_length=5)  # en, vi
    meta_title = models.CharField(max_length=255, blank=True, default='')
    meta_description = models.TextField(blank=True, default='')
    keywords = models.CharField(max_length=500, blank=True, default='')
    canonical_url = models.CharField(max_length=500, blank=True, default='')
    og_title = models.CharField(max_length=255, blank=True, default='')
    og_description = models.TextField(blank=True, default='')
    og_image_url = models.CharField(max_length=500, blank=True, default='')
    og_type = models.CharField(max_length=30, default='website')
    og_url = models.CharField(max_length=500, blank=True, default='')
    no_index = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'page_seo'
        ordering = ['page_key', 'language']
        constraints = [
            models.UniqueConstraint(fields=['page_key', 'language'], name='page_seo_unique'),
        ]

    def __str__(self):
        return f"{self.page_key}/{self.language}"


# 11. HOME CONTENT - Nội dung trang chủ (1 dòng duy nhất)
class HomeContent(models.Model):
    VIDEO_SLOTS = {
        'hero': 'hero.landingpage.mp4',
        'reservation': 'hero2.landingpage.mp4',
    }

    hero_title = models.CharField(max_length=255, default="Hum's Pizza")
    hero_title_vi = models.CharField(max_length=255, default="Hum's Pizza")
    featured_title = models.CharField(max_length=255, default='Featured Dishes')
    featured_title_vi = models.CharField(max_length=255, default='Món nổi bật')
    featured_subtitle = models.CharField(max_length=255, blank=True, default='')
    featured_subtitle_vi = models.CharField(max_length=255, blank=True, default='')
    reservation_title = models.CharField(max_length=255, default='Reserve a Table')
    reservation_title_vi = models.CharField(max_length=255, default='Đặt bàn')
    reservation_subtitle = models.CharField(max_length=255, blank=True, default='')
    reservation_subtitle_vi = models.CharField(max_length=255, blank=True, default='')
    reviews_title = models.CharField(max_length=255, default='What Our Guests Say')
    reviews_title_vi = models.CharField(max_length=255, default='Khách hàng nói gì')
    reviews_subtitle = models.CharField(max_length=255, blank=True, default='')
    reviews_subtitle_vi = models.CharField(max_length=255, blank=True, default='')
    blog_title = models.CharField(max_length=255, default='Latest News')
    blog_title_vi = models.CharField(max_length=255, default='Tin tức mới')
    blog_subtitle = models.CharField(max_length=255, blank=True, default='')
    blog_subtitle_vi = models.CharField(max_length=255, blank=True, default='')

    # Video đã upload nhưng chưa áp dụng (chờ bấm "Lưu thay đổi")
    pending_hero_video_url = models.CharField(max_length=500, null=True, blank=True)
    pending_reservation_video_url = models.CharField(max_length=500, null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'home_content'

    def __str__(self):
        return 'Home content'

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj

    def pending_field(self, video_type):
        return 'pending_hero_video_url' if video_type == 'hero' else 'pending_reservation_video_url'

    def get_pending(self, video_type):
        return getattr(self, self.pending_field(video_type))

    def set_pending(self, video_type, url):
        field = self.pending_field(video_type)
        setattr(self, field, url)
        self.save(update_fields=[field, 'updated_at'])
