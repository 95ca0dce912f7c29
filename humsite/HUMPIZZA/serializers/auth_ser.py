from django.contrib.auth.models import User
from rest_framework import serializers

from ..models import Profile, get_profile, get_role


class UserSerializer(serializers.ModelSerializer):
    """Payload của /api/{admin|staff}/me và /api/auth/login"""
    role = serializers.SerializerMethodField()
    fullName = serializers.SerializerMethodField()
    permissions = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'role', 'fullName', 'permissions', 'email']

    def get_role(self, obj):
        return get_role(obj)

    def get_fullName(self, obj):
        return get_profile(obj).full_name or obj.first_name or obj.username

    def get_permissions(self, obj):
        return get_profile(obj).permissions or []


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)


class ProfileUpdateSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(min_length=6, required=False, write_only=True)

    def update(self, user, validated_data):
        if 'email' in validated_data:
            user.email = validated_data['email']
        if validated_data.get('password'):
            user.set_password(validated_data['password'])
        user.save()
        if 'fullName' in validated_data:
            profile = get_profile(user)
            profile.full_name = validated_data['fullName']
            profile.save(update_fields=['full_name'])
        return user


class UserAdminSerializer(serializers.ModelSerializer):
    """Admin quản lý tài khoản nhân viên"""
    role = serializers.ChoiceField(choices=Profile.ROLE_CHOICES, source='profile.role', default='staff')
    permissions = serializers.ListField(
        child=serializers.CharField(), source='profile.permissions', required=False
    )
    fullName = serializers.CharField(source='profile.full_name', required=False, allow_blank=True)
    isActive = serializers.BooleanField(source='is_active', required=False)
    password = serializers.CharField(write_only=True, required=False, min_length=6)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role', 'permissions', 'fullName', 'isActive', 'password']

    def validate_username(self, value):
        value = value.strip()
        qs = User.objects.filter(username__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Tên đăng nhập đã tồn tại')
        return value

    def validate(self, attrs):
        if not self.instance and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'Bắt buộc khi tạo tài khoản'})
        return attrs

    def _apply(self, user, validated_data):
        profile_data = validated_data.pop('profile', {})
        password = validated_data.pop('password', None)
        for key, value in validated_data.items():
            setattr(user, key, value)
        if password:
            user.set_password(password)
        role = profile_data.get('role')
        if role:
            user.is_staff = role in ('admin', 'staff')
        user.save()

        profile = get_profile(user)
        for key, value in profile_data.items():
            setattr(profile, key, value)
        profile.save()
        return user

    def create(self, validated_data):
        return self._apply(User(), validated_data)

    def update(self, instance, validated_data):
        return self._apply(instance, validated_data)
