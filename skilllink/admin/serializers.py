from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Role, UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ['id', 'name', 'email', 'role', 'status', 'last_login', 'created_at', 'updated_at']
        read_only_fields = fields


class TrainerSerializer(UserProfileSerializer):
    courses_count = serializers.IntegerField(read_only=True)

    class Meta(UserProfileSerializer.Meta):
        fields = UserProfileSerializer.Meta.fields + ['courses_count']
        read_only_fields = fields


class WorkerSerializer(UserProfileSerializer):
    enrollments_count = serializers.IntegerField(read_only=True)
    certificates_count = serializers.IntegerField(read_only=True)
    assessments_count = serializers.IntegerField(read_only=True)

    class Meta(UserProfileSerializer.Meta):
        fields = UserProfileSerializer.Meta.fields + ['enrollments_count', 'certificates_count', 'assessments_count']
        read_only_fields = fields


class AccountWriteSerializer(serializers.ModelSerializer):
    """
    Create or edit an account. ``password`` must come with a matching
    ``password_confirmation``; on update every field is optional.
    """
    password = serializers.CharField(write_only=True, required=False, trim_whitespace=False)
    password_confirmation = serializers.CharField(write_only=True, required=False, trim_whitespace=False)

    class Meta:
        model = UserProfile
        fields = ['name', 'email', 'password', 'password_confirmation']
        extra_kwargs = {'email': {'validators': []}}

    def validate_email(self, value):
        value = value.strip().lower()
        others = UserProfile.objects.filter(email__iexact=value)
        if self.instance is not None:
            others = others.exclude(pk=self.instance.pk)
        if others.exists():
            raise serializers.ValidationError('The email has already been taken.')
        return value

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def validate(self, attrs):
        if self.instance is None and 'password' not in attrs:
            raise serializers.ValidationError({'password': ['The password field is required.']})
        if 'password' in attrs and attrs.get('password_confirmation') != attrs['password']:
            raise serializers.ValidationError({'password': ['The password field confirmation does not match.']})
        attrs.pop('password_confirmation', None)
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        profile = UserProfile(**validated_data)
        profile.set_password(password)
        profile.save()
        return profile

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class RegisterSerializer(AccountWriteSerializer):
    role = serializers.ChoiceField(choices=[Role.TRAINER, Role.WORKER])

    class Meta(AccountWriteSerializer.Meta):
        fields = AccountWriteSerializer.Meta.fields + ['role']


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class ProfileUpdateSerializer(AccountWriteSerializer):
    current_password = serializers.CharField(write_only=True, required=False, trim_whitespace=False)

    class Meta(AccountWriteSerializer.Meta):
        fields = AccountWriteSerializer.Meta.fields + ['current_password']

    def validate(self, attrs):
        attrs = super().validate(attrs)
        current = attrs.pop('current_password', None)
        if 'password' in attrs:
            if not current:
                raise serializers.ValidationError({
                    'current_password': ['The current password field is required when password is present.']
                })
            if not self.instance.check_password(current):
                raise serializers.ValidationError({'current_password': ['The current password is incorrect.']})
        return attrs
