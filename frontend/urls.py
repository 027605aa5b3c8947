from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API consumed by the web client; pages are rendered client-side.
    path('api/', include('frontend.frontend_app.urls')),
]
