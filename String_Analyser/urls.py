from django.urls import path
from .views import IndexView, StringAnalyzerView, StringDetailView, NaturalLanguageFilterView

urlpatterns = [
    path('', IndexView.as_view(), name='index'),
    path('strings', StringAnalyzerView.as_view(), name='analyze_string'),
    path('strings/filter-by-natural-language',
         NaturalLanguageFilterView.as_view(), name='nl_filter'),
    # values may contain '/', so match the rest of the path
    path('strings/<path:value>', StringDetailView.as_view(), name='get_string'),

]
