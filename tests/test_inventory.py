from datetime import datetime

import pytest

from healthpoint_pos.errors import NotFoundError, ValidationError
from healthpoint_pos.inventory import (filter_products, parse_date_added, seed_demo_data,
                                       stock_level, validate_product_form)


def form(**kw):
    d = {'name': 'Cetirizine 10mg', 'category': 'Allergy', 'price': '4.25', 'stock': '12', 'status': 'Available'}
    d.update(kw)
    return d


@pytest.mark.parametrize('field,value,message', [
    ('name', '  ', 'Product name is required!'),
    ('category', None, 'Please select a category!'),
    ('price', '', 'Price is required!'),
    ('stock', '', 'Stock quantity is required!'),
    ('status', None, 'Please select a status!'),
    ('price', 'abc', 'Please enter a valid price!'),
    ('stock', '1.5', 'Please enter a valid stock quantity!'),
    ('stock', '-2', 'Please enter a valid stock quantity!'),
])
def test_form_validation_messages(field, value, message):
    with pytest.raises(ValidationError) as exc:
        validate_product_form(form(**{field: value}))
    assert str(exc.value) == message


def test_form_is_cleaned():
    d = validate_product_form(form(name='  Cetirizine  ', price=' 4.25 ', stock='0'))
    assert d == {'name': 'Cetirizine', 'category': 'Allergy', 'price': 4.25, 'stock': 0,
                 'status': 'Available', 'image_path': ''}


def test_add_product_assigns_category_id(inventory):
    p = inventory.add_product(form(category='Antibiotic'), now=datetime(2024, 5, 1, 8, 0, 0))
    assert 0 <= p['product_id'] <= 999
    assert inventory.display_id(p) == f"ANB-{p['product_id']:03d}"
    assert p['date_added'] == '2024-05-01 08:00:00'
    assert p['stock'] == 12 and p['price'] == 4.25


def test_add_product_skips_taken_numbers(inventory):
    first = inventory.add_product(form())
    second = inventory.add_product(form(name='Loratadine'))
    assert first['product_id'] != second['product_id']


@pytest.mark.parametrize('category,code', [('Co-Q10', 'CO-'), ('1st Aid', '1AS'), ('Ñame Root', 'ÑRA')])
def test_add_product_with_non_letter_category_code(inventory, category, code):
    p = inventory.add_product(form(category=category))
    assert 0 <= p['product_id'] <= 999
    assert inventory.display_id(p) == f"{code}-{p['product_id']:03d}"


def test_invalid_form_never_reaches_store(inventory):
    with pytest.raises(ValidationError):
        inventory.add_product(form(price='free'))
    assert inventory.list_products() == []


def test_update_and_delete(inventory):
    p = inventory.add_product(form())
    updated = inventory.update_product(p['product_id'], form(stock='2', status='Low Stock'))
    assert (updated['stock'], updated['status']) == (2, 'Low Stock')
    inventory.delete_product(p['product_id'])
    with pytest.raises(NotFoundError):
        inventory.get_product(p['product_id'])


def test_update_and_delete_missing_product(inventory):
    with pytest.raises(NotFoundError):
        inventory.update_product(999, form())
    with pytest.raises(NotFoundError):
        inventory.delete_product(999)


def test_list_newest_id_first_and_available_only(inventory):
    inventory.add_product(form(name='A'))
    inventory.add_product(form(name='B', stock='0'))
    inventory.add_product(form(name='C', status='Discontinued'))
    ids = [p['product_id'] for p in inventory.list_products()]
    assert ids == sorted(ids, reverse=True)
    assert [p['name'] for p in inventory.available_products()] == ['A']


def test_filter_products():
    products = [
        {'name': 'Paracetamol', 'category': 'Pain Reliever'},
        {'name': 'Amoxicillin', 'category': 'Antibiotic'},
        {'name': 'Mystery', 'category': ''},
    ]
    assert [p['name'] for p in filter_products(products)] == ['Paracetamol', 'Amoxicillin']
    assert [p['name'] for p in filter_products(products, 'AMOX')] == ['Amoxicillin']
    assert [p['name'] for p in filter_products(products, 'relie')] == ['Paracetamol']
    assert [p['name'] for p in filter_products(products, '', 'Antibiotic')] == ['Amoxicillin']
    assert filter_products(products, 'para', 'Antibiotic') == []


@pytest.mark.parametrize('stock,level', [(None, 'out'), (-1, 'out'), (0, 'out'), (1, 'low'), (5, 'low'), (6, 'in')])
def test_stock_level(stock, level):
    assert stock_level(stock) == level


def test_parse_date_added():
    assert parse_date_added('2024-05-01') == datetime(2024, 5, 1)
    assert parse_date_added('2024-05-01T08:30:00') == datetime(2024, 5, 1, 8, 30)
    assert parse_date_added('2024-05-01 08:30:00') == datetime(2024, 5, 1, 8, 30)
    assert parse_date_added(0) == datetime.fromtimestamp(0)
    assert parse_date_added('') is None
    assert parse_date_added('yesterday') is None


def test_seed_demo_data_only_once(inventory):
    assert seed_demo_data(inventory) == 5
    assert seed_demo_data(inventory) == 0
    assert len(inventory.list_products()) == 5
