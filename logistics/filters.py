"""
Listing search filters (django-filter).
"""

import django_filters

from .models import Listing


class ListingFilter(django_filters.FilterSet):
    """
    Route + capacity search.

    ?from_iata=DXB&to_iata=CAI&min_capacity=15
    """

    from_iata = django_filters.CharFilter(method='filter_iata')
    to_iata = django_filters.CharFilter(method='filter_iata')
    min_capacity = django_filters.NumberFilter(field_name='capacity_kg', lookup_expr='gte')
    date_after = django_filters.DateFilter(field_name='date', lookup_expr='gte')

    class Meta:
        model = Listing
        fields = ['from_iata', 'to_iata', 'min_capacity', 'date_after']

    def filter_iata(self, queryset, name, value):
        # Codes are stored upper-case; exact match on the normalized code
        return queryset.filter(**{name: value.strip().upper()})
