import django_filters

from utils.rbac import Role

from .models import Principal


class PrincipalFilter(django_filters.FilterSet):
    """
    Filter for the admin user listing
    """

    name = django_filters.CharFilter(lookup_expr="icontains")
    email = django_filters.CharFilter(lookup_expr="iexact")
    role = django_filters.ChoiceFilter(choices=Role.choices)

    class Meta:
        model = Principal
        fields = ["name", "email", "role"]
