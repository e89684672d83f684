from django.urls import path
from .views import (
    BlockIPView,
    GlobalLeaderboardView,
    HealthView,
    StatsView,
)
from giveaway.views import (
    CountdownView,
    GiveawayCreateView,
    GiveawayDeleteView,
    GiveawayDetailView,
    GiveawayJoinView,
    GiveawayListView,
    LeaderboardView,
    MyGiveawaysView,
    QRCodeView,
)

urlpatterns = [
    path('create', GiveawayCreateView.as_view()),
    path('join/<str:pk>', GiveawayJoinView.as_view()),
    path('delete/<str:pk>', GiveawayDeleteView.as_view()),
    path('giveaways', GiveawayListView.as_view()),
    path('giveaway/<str:pk>', GiveawayDetailView.as_view()),
    path('leaderboard/<str:pk>', LeaderboardView.as_view()),
    path('countdown/<str:pk>', CountdownView.as_view()),
    path('qrcode/<str:pk>/<str:participant>', QRCodeView.as_view()),
    path('my-giveaways', MyGiveawaysView.as_view()),
    path('global-leaderboard', GlobalLeaderboardView.as_view()),
    path('stats', StatsView.as_view()),
    path('health', HealthView.as_view()),
    path('admin/block-ip', BlockIPView.as_view()),
]
