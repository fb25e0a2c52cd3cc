"""Root URL configuration for the Ingenialists API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("v1/", include("authentication.urls")),
    path("v1/", include("categories.urls")),
    path("v1/", include("articles.urls")),
    path("v1/swagger/doc.json", SpectacularAPIView.as_view(), name="schema"),
    path("v1/swagger/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
