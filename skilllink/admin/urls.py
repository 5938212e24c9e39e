from django.urls import path, include
from rest_framework import routers
from .views import (
    AdminAccountViewSet, TrainerAccountViewSet, WorkerAccountViewSet,
    enrollment_approve, metrics
)

router = routers.SimpleRouter()
router.register(r'trainers', TrainerAccountViewSet, basename='admin-trainers')
router.register(r'workers', WorkerAccountViewSet, basename='admin-workers')
router.register(r'admins', AdminAccountViewSet, basename='admin-admins')

urlpatterns = [
    path('', include(router.urls)),
    path('enrollments/<str:pk>/approve/', enrollment_approve, name='admin-enrollment-approve'),
    path('metrics/', metrics, name='admin-metrics'),
]
