import uuid
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import CartEntry, Order
from marketplace.tests.factories import AdminFactory, CartEntryFactory, OrderFactory, PrincipalFactory, ProductFactory


class OrderViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.user1 = PrincipalFactory()
        self.user2 = PrincipalFactory()
        self.admin = AdminFactory()
        self.product = ProductFactory(price=Decimal("10.00"))

        self.order_list_url = reverse("marketplace:order-list")

    def detail_url(self, order):
        return reverse("marketplace:order-detail", kwargs={"pk": str(order.pk)})

    def test_create_order_consumes_only_callers_cart(self):
        CartEntryFactory(user=self.user1, product=self.product, amount=2)
        CartEntryFactory(user=self.user1)
        other_entry = CartEntryFactory(user=self.user2, product=self.product)
        self.client.force_authenticate(user=self.user1)

        response = self.client.post(
            self.order_list_url, {"cart": [[str(self.product.id), 2]], "total": "20.00"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user_id"], str(self.user1.pk))
        self.assertEqual(response.data["cart"], [[str(self.product.id), 2]])
        self.assertEqual(Decimal(response.data["total"]), Decimal("20.00"))
        self.assertEqual(response.data["status"], "pending")
        self.assertFalse(CartEntry.objects.filter(user=self.user1).exists())
        self.assertEqual(list(CartEntry.objects.values_list("id", flat=True)), [other_entry.id])

    def test_create_order_requires_authentication(self):
        response = self.client.post(self.order_list_url, {"cart": [], "total": "0"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Order.objects.exists())

    def test_create_order_rejects_bad_cart_lines(self):
        self.client.force_authenticate(user=self.user1)
        for cart in ([["abc"]], [["abc", 0]], [["", 1]], [["abc", "2"]]):
            response = self.client.post(self.order_list_url, {"cart": cart, "total": "1.00"}, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, cart)
            self.assertTrue(response.data["errors"][0]["field"].startswith("cart"))

    def test_create_order_requires_total(self):
        self.client.force_authenticate(user=self.user1)
        response = self.client.post(self.order_list_url, {"cart": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["field"], "total")

    def test_list_orders_is_owner_scoped(self):
        mine = OrderFactory(user=self.user1)
        OrderFactory(user=self.user2)
        self.client.force_authenticate(user=self.user1)

        response = self.client.get(self.order_list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totals"], 1)
        self.assertEqual(response.data["data"][0]["id"], str(mine.id))

    def test_admin_filters_orders_by_user(self):
        OrderFactory(user=self.user1)
        OrderFactory(user=self.user2)
        OrderFactory(user=self.user2)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.order_list_url, {"user_id": str(self.user2.pk)})

        self.assertEqual(response.data["totals"], 2)

    def test_retrieve_own_order(self):
        order = OrderFactory(user=self.user1)
        self.client.force_authenticate(user=self.user1)
        response = self.client.get(self.detail_url(order))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_retrieve_someone_elses_order_is_forbidden(self):
        order = OrderFactory(user=self.user2)
        self.client.force_authenticate(user=self.user1)
        response = self.client.get(self.detail_url(order))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_order_status(self):
        order = OrderFactory(user=self.user1)
        self.client.force_authenticate(user=self.user1)

        response = self.client.patch(self.detail_url(order), {"status": "confirmed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "confirmed")

    def test_admin_deletes_any_order(self):
        order = OrderFactory(user=self.user1)
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(self.detail_url(order))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Order.objects.filter(pk=order.pk).exists())

    def test_unknown_order_is_not_found(self):
        self.client.force_authenticate(user=self.user1)
        response = self.client.get(reverse("marketplace:order-detail", kwargs={"pk": str(uuid.uuid4())}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
