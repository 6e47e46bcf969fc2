from django.urls import path
from units.views import HealthUnitsView, MunicipiosView
from users.views import LogoutView

urlpatterns = [
    path('api/health-units', HealthUnitsView.as_view(), name='health-units'),
    path('api/municipios', MunicipiosView.as_view(), name='municipios'),
    path('api/auth/logout', LogoutView.as_view(), name='logout'),
]
