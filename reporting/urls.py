from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import RevenueCenterViewSet

router = SimpleRouter()
router.register(r'revenue-centers', RevenueCenterViewSet, basename='revenue-center')

urlpatterns = [
    path('', include(router.urls)),
]
