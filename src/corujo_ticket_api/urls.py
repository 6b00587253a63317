from django.contrib import admin
from django.urls import include, path
from django_prometheus import exports

admin.site.site_header = "CorujoTicket · Administração"
admin.site.site_title = "CorujoTicket"

urlpatterns = [
    path("admin/", admin.site.urls),
    # API de distribuição, atendimento e tickets
    path("api/", include("plugins.django_interface.urls")),
    path("metrics/", exports.ExportToDjangoView, name="corujo-metrics"),
]
