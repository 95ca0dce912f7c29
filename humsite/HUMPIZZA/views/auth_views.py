import logging

from django.contrib.auth import authenticate, login as auth_login, logout as auth_logout
from django.contrib.auth.models import User
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from ..models import get_role
from ..permissions import IsAdminRole, IsBackOffice, IsStaffRole
from ..serializers import LoginSerializer, ProfileUpdateSerializer, UserAdminSerializer, UserSerializer

logger = logging.getLogger(__name__)


# ==========================================
# 1. LOGIN / LOGOUT
# ==========================================
@api_view(['POST'])
@permission_classes([AllowAny])
@authentication_classes([])  # Tắt check token để login được
def login(request):
    """Đăng nhập chung cho admin và nhân viên"""
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'message': 'Username and password are required'}, status=status.HTTP_400_BAD_REQUEST)

    user = authenticate(
        username=serializer.validated_data['username'],
        password=serializer.validated_data['password'],
    )
    if user is None:
        logger.info("Failed login for %s", serializer.validated_data['username'])
        return Response({'message': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)

    token = None
    # Chỉ admin / nhân viên mới có session phía server
    if get_role(user) in ('admin', 'staff'):
        auth_login(request, user)
        token = str(RefreshToken.for_user(user).access_token)

    return Response({
        'success': True,
        'user': UserSerializer(user).data,
        'token': token,
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def logout(request):
    auth_logout(request)
    return Response({'message': 'Logout successful'})


# ==========================================
# 2. CURRENT USER (dùng cho AuthGuard)
# ==========================================
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def current_admin(request):
    return Response(UserSerializer(request.user).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStaffRole])
def current_staff(request):
    return Response(UserSerializer(request.user).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsBackOffice])
def update_profile(request):
    serializer = ProfileUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.update(request.user, serializer.validated_data)
    return Response(UserSerializer(user).data)


# ==========================================
# 3. QUẢN LÝ TÀI KHOẢN (chỉ admin)
# ==========================================
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users(request):
    if request.method == 'GET':
        qs = User.objects.select_related('profile').order_by('username')
        return Response(UserAdminSerializer(qs, many=True).data)

    serializer = UserAdminSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info("User %s created by %s", user.username, request.user.username)
    return Response(UserAdminSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk):
    user = get_object_or_404(User, pk=pk)

    if request.method == 'DELETE':
        if user.pk == request.user.pk:
            return Response({'message': 'Không thể xóa tài khoản đang đăng nhập'}, status=status.HTTP_400_BAD_REQUEST)
        user.delete()
        return Response({'success': True})

    serializer = UserAdminSerializer(user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)
