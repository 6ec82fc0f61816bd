from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Administrator dashboard
    path('overview/', views.platform_overview, name='overview'),

    # User summaries
    path('me/', views.user_summary, name='my-summary'),  # Current user
    path('users/<uuid:user_id>/', views.user_summary, name='user-summary'),
]
