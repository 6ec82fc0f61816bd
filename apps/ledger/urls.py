from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    path('', views.entry_list, name='entry-list'),
    path('balance/', views.balance, name='balance'),
]
