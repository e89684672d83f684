from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, re_path, include
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from api.views import home
from giveaway.views import GiveawayRedirectView


schema_view = get_schema_view(
    openapi.Info(
        title="Luminora Giveaway API",
        default_version='v1.0',
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)


urlpatterns = [
    path('', home),
    path('admin/', admin.site.urls),
    path('g/<str:pk>', GiveawayRedirectView.as_view(), name='giveaway-redirect'),
    re_path(r'^api/doc(?P<format>\.json|\.yaml)$', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    re_path(r'^api/doc/$', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('api/', include('api.urls')),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'api.views.not_found'
handler500 = 'api.views.server_error'
