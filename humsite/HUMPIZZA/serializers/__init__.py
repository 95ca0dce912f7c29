from .auth_ser import LoginSerializer, ProfileUpdateSerializer, UserAdminSerializer, UserSerializer
from .content_ser import (
    BlogPostSerializer, CustomerReviewSerializer, HomeContentSerializer,
    PageSeoSerializer, SaveVideoSerializer, generate_slug,
)
from .menu_ser import (
    CategorySerializer, CustomizationSchemaSerializer, FlexibleImageField,
    MenuItemFormSerializer, MenuItemSerializer, SchemaIdsSerializer,
)
from .order_ser import (
    NotificationSerializer, OrderSerializer, OrderStatusSerializer,
    ReservationSerializer, ReservationStatusSerializer,
)
