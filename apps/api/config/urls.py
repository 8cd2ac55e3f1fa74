from django.contrib import admin
from django.urls import path

# HTTP 라우팅(뷰)은 API 게이트웨이 쪽 협력자가 소유한다.
# 여기서는 운영 확인용 admin 만 노출.
urlpatterns = [
    path("admin/", admin.site.urls),
]
