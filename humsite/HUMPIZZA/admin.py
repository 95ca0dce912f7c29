from django.contrib import admin

from .models import (
    BlogPost, Category, CustomerReview, CustomizationSchema, HomeContent, MenuItem,
    MenuItemSchema, Notification, Order, OrderItem, PageSeo, Profile, Reservation,
)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'full_name')
    list_filter = ('role',)
    search_fields = ('user__username', 'full_name')


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'name_vi', 'sort_order')


class MenuItemSchemaInline(admin.TabularInline):
    model = MenuItemSchema
    extra = 0


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'is_available', 'is_pinned')
    list_filter = ('is_available', 'is_pinned', 'category')
    search_fields = ('name', 'name_vi')
    inlines = [MenuItemSchemaInline]


@admin.register(CustomizationSchema)
class CustomizationSchemaAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'is_active')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer_name', 'customer_phone', 'order_type', 'total_amount', 'status', 'created_at')
    list_filter = ('status', 'order_type')
    inlines = [OrderItemInline]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ('name', 'phone', 'date', 'time', 'guests', 'status')
    list_filter = ('status', 'date')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('type', 'title', 'priority', 'is_read', 'created_at')
    list_filter = ('type', 'is_read')


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ('title', 'published', 'pinned', 'pin_order', 'created_at')
    search_fields = ('title', 'title_vi')
    list_filter = ('published', 'pinned')


@admin.register(CustomerReview)
class CustomerReviewAdmin(admin.ModelAdmin):
    list_display = ('customer_name', 'rating', 'is_published', 'is_pinned')
    list_filter = ('is_published', 'is_pinned')


admin.site.register(PageSeo)
admin.site.register(HomeContent)
