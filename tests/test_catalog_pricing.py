import json
import tempfile
from decimal import Decimal
from pathlib import Path

from django.http import Http404
from django.test import SimpleTestCase, override_settings

from catalog.catalog import get_catalog, get_item_or_404, load_catalog
from catalog.pricing import format_amount, load_config, quote
from catalog.templatetags.money import tenge, tons
from tests.factories import make_price_item


class CatalogTests(SimpleTestCase):

    def test_bundled_catalog_has_three_tabs(self):
        catalog = get_catalog()
        self.assertEqual([c.slug for c in catalog.categories], ['circles', 'pipes', 'profile'])
        self.assertEqual(catalog.get_category('pipes').order_label, 'Заказать стальные трубы')

    def test_unknown_tab_falls_back_to_first(self):
        catalog = get_catalog()
        self.assertEqual(catalog.get_category('bars').slug, 'circles')
        self.assertEqual(catalog.get_category(None).slug, 'circles')

    def test_items_for_category(self):
        catalog = get_catalog()
        items = catalog.items_for('profile')
        self.assertTrue(items)
        self.assertTrue(all(i.category == 'profile' for i in items))

    def test_get_item(self):
        item = get_catalog().get_item(1)
        self.assertEqual(item.name, 'Круг')
        self.assertEqual(item.weight_per_piece, Decimal('14.8'))
        with self.assertRaises(KeyError):
            get_catalog().get_item(9999)

    def test_get_item_or_404(self):
        self.assertEqual(get_item_or_404(2).id, 2)
        with self.assertRaises(Http404):
            get_item_or_404(9999)

    def test_price_item_dict_round_trip(self):
        item = make_price_item()
        self.assertEqual(type(item).from_dict(item.to_dict()), item)

    def test_load_catalog_without_categories_fails(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'catalog.json'
            path.write_text(json.dumps({'categories': [], 'items': []}), encoding='utf-8')
            with self.assertRaises(ValueError):
                load_catalog(path)


class PricingTests(SimpleTestCase):

    def setUp(self):
        self.item = get_catalog().get_item(1)  # Алматы, 420 000 ₸/т

    def test_retail_quote(self):
        q = quote(self.item, Decimal('1'))
        self.assertEqual(q.price_category, 'retail')
        self.assertEqual(q.price_per_ton_tenge, Decimal('453600'))
        self.assertEqual(q.price_per_ton_rub, Decimal('81000.00'))
        self.assertEqual(q.delivery_price, Decimal('8000'))

    def test_wholesale_categories(self):
        self.assertEqual(quote(self.item, Decimal('5')).price_category, 'small_wholesale')
        self.assertEqual(quote(self.item, Decimal('5')).price_per_ton_tenge, Decimal('436800'))
        q = quote(self.item, Decimal('20'))
        self.assertEqual(q.price_category, 'wholesale')
        self.assertEqual(q.price_per_ton_tenge, Decimal('420000'))
        self.assertEqual(q.delivery_price, Decimal('160000'))

    def test_unknown_branch_uses_default_delivery_rate(self):
        item = make_price_item(branch='Караганда')
        self.assertEqual(quote(item, Decimal('2')).delivery_price, Decimal('24000'))

    def test_non_positive_tons_rejected(self):
        with self.assertRaises(ValueError):
            quote(self.item, Decimal('0'))

    @override_settings(RUB_RATE='6')
    def test_rub_rate_override(self):
        self.assertEqual(quote(self.item, Decimal('1')).price_per_ton_rub, Decimal('75600.00'))

    def test_broken_pricing_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'pricing.json'
            path.write_text('{"rub_rate": "abc"}', encoding='utf-8')
            with self.assertLogs('catalog.pricing', level='WARNING'):
                cfg = load_config(path)
        self.assertEqual(cfg.rub_rate, Decimal('5.60'))
        self.assertEqual(cfg.category_for(Decimal('50')).code, 'retail')

    def test_format_amount(self):
        self.assertEqual(format_amount(Decimal('1010000')), '1 010 000')
        self.assertEqual(format_amount(Decimal('999.5')), '1 000')
        self.assertEqual(format_amount(510000.4), '510 000')


class MoneyFilterTests(SimpleTestCase):

    def test_tons_keeps_two_decimals(self):
        self.assertEqual(tons(Decimal('0.15')), '0.15')
        self.assertEqual(tons(Decimal('1.10')), '1.1')
        self.assertEqual(tons(Decimal('1')), '1')
        self.assertEqual(tons(Decimal('20')), '20')
        self.assertEqual(tons(Decimal('0.125')), '0.13')

    def test_tenge(self):
        self.assertEqual(tenge(Decimal('461600')), '461 600 ₸')
        self.assertEqual(tenge('n/a'), 'n/a')
