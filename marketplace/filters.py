import django_filters

from .models import CartEntry, Order, Product


class ProductFilter(django_filters.FilterSet):
    """
    Filter for products with various filtering options
    """

    # Case-insensitive substring matches
    name = django_filters.CharFilter(lookup_expr="icontains")
    category = django_filters.CharFilter(lookup_expr="icontains")

    # Price range filters
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    class Meta:
        model = Product
        fields = ["name", "category"]

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock__gt=0)
        elif value is False:
            return queryset.filter(stock=0)
        return queryset


class CartEntryFilter(django_filters.FilterSet):
    product_id = django_filters.UUIDFilter(field_name="product_id")
    user_id = django_filters.UUIDFilter(field_name="user_id")
    status = django_filters.ChoiceFilter(choices=CartEntry.STATUS_CHOICES)
    amount = django_filters.NumberFilter()

    class Meta:
        model = CartEntry
        fields = ["product_id", "user_id", "status", "amount"]


class OrderFilter(django_filters.FilterSet):
    user_id = django_filters.UUIDFilter(field_name="user_id")
    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    total = django_filters.NumberFilter()

    class Meta:
        model = Order
        fields = ["user_id", "status", "total"]
