import logging
from datetime import datetime

from .config import ALL_CATEGORIES, LOW_STOCK_THRESHOLD, PRODUCT_STATUSES, STATUS_AVAILABLE
from .db import now_str
from .errors import NotFoundError, ValidationError
from .ids import IdGenerator, exists_check, format_id, split_id

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = ['product_id', 'name', 'category', 'price', 'stock', 'status', 'image_path', 'date_added']


def _text(v): return '' if v is None else str(v).strip()


def validate_product_form(form):
    """Check raw form input and return it cleaned up.

    ``form`` holds strings as typed: name, category, price, stock, status and
    optionally image_path. Raises ValidationError with the message to show.
    """
    name = _text(form.get('name'))
    category = form.get('category')
    price = _text(form.get('price'))
    stock = _text(form.get('stock'))
    status = form.get('status')
    if not name: raise ValidationError('Product name is required!')
    if not category: raise ValidationError('Please select a category!')
    if not price: raise ValidationError('Price is required!')
    if not stock: raise ValidationError('Stock quantity is required!')
    if not status: raise ValidationError('Please select a status!')
    if status not in PRODUCT_STATUSES:
        raise ValidationError(f'Unknown status {status!r}')
    try:
        price = float(price)
    except ValueError:
        raise ValidationError('Please enter a valid price!') from None
    try:
        stock = int(stock)
    except ValueError:
        raise ValidationError('Please enter a valid stock quantity!') from None
    if price < 0: raise ValidationError('Please enter a valid price!')
    if stock < 0: raise ValidationError('Please enter a valid stock quantity!')
    return {
        'name': name,
        'category': category,
        'price': price,
        'stock': stock,
        'status': status,
        'image_path': (form.get('image_path') or '').strip(),
    }


def parse_date_added(value):
    """date_added may be epoch seconds, a date, or a datetime string."""
    if value in (None, ''):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    text = str(value).strip()
    if text.isdigit():
        return datetime.fromtimestamp(int(text))
    try:
        return datetime.fromisoformat(text.replace('T', ' '))
    except ValueError:
        logger.warning('Unreadable date_added %r', value)
        return None


def stock_level(stock):
    stock = stock or 0
    if stock <= 0: return 'out'
    if stock <= LOW_STOCK_THRESHOLD: return 'low'
    return 'in'


def filter_products(products, search='', category=ALL_CATEGORIES):
    term = (search or '').strip().lower()
    out = []
    for p in products:
        if not (p.get('category') or '').strip():
            continue
        if term and term not in p['name'].lower() and term not in p['category'].lower():
            continue
        if category not in (None, '', ALL_CATEGORIES) and p['category'] != category:
            continue
        out.append(p)
    return out


class Inventory:
    """Product CRUD over ``meds_product``."""

    def __init__(self, db, ids=None):
        self.db = db
        self.ids = ids or IdGenerator()

    def display_id(self, product):
        return format_id(self.ids.codes.resolve(product['category']), product['product_id'])

    def new_product_id(self, category):
        """Pick a free ``CODE-NNN`` id; its number becomes the product's primary key."""
        return self.ids.generate(category, exists_check(self.db, 'meds_product', 'product_id', numeric=True))

    def list_products(self):
        return self.db.query('SELECT * FROM meds_product ORDER BY product_id DESC;')

    def get_product(self, product_id):
        rows = self.db.query('SELECT * FROM meds_product WHERE product_id=?;', (product_id,))
        if not rows:
            raise NotFoundError(f'Product {product_id} not found')
        return rows[0]

    def available_products(self):
        return self.db.query('SELECT * FROM meds_product WHERE status=? AND stock > 0 ORDER BY name;', (STATUS_AVAILABLE,))

    def add_product(self, form, now=None):
        d = validate_product_form(form)
        generated = self.new_product_id(d['category'])
        product_id = split_id(generated)[1]
        self.db.execute(
            'INSERT INTO meds_product(product_id,name,category,price,stock,status,image_path,date_added) VALUES(?,?,?,?,?,?,?,?);',
            (product_id, d['name'], d['category'], d['price'], d['stock'], d['status'], d['image_path'], now_str(now)))
        logger.info('Added product %s (%s)', generated, d['name'])
        return self.get_product(product_id)

    def update_product(self, product_id, form):
        d = validate_product_form(form)
        cur = self.db.execute(
            'UPDATE meds_product SET name=?, category=?, price=?, stock=?, status=?, image_path=? WHERE product_id=?;',
            (d['name'], d['category'], d['price'], d['stock'], d['status'], d['image_path'], product_id))
        if cur.rowcount == 0:
            raise NotFoundError(f'Product {product_id} not found')
        logger.info('Updated product %s', product_id)
        return self.get_product(product_id)

    def delete_product(self, product_id):
        cur = self.db.execute('DELETE FROM meds_product WHERE product_id=?;', (product_id,))
        if cur.rowcount == 0:
            raise NotFoundError(f'Product {product_id} not found')
        logger.info('Deleted product %s', product_id)


def seed_demo_data(inventory):
    """Insert a few products into an empty inventory. Returns how many."""
    cnt = inventory.db.query('SELECT COUNT(*) AS c FROM meds_product;')[0]['c']
    if cnt > 0:
        return 0
    demo = [
        ('Paracetamol 500mg', 'Pain Reliever', '2.50', '120'),
        ('Ibuprofen 200mg', 'NSAIDs', '3.75', '80'),
        ('Amoxicillin 500mg', 'Antibiotic', '12.00', '40'),
        ('Cetirizine 10mg', 'Allergy', '4.25', '4'),
        ('Oral Rehydration Salts', 'Oral Rehydration Solution', '15.00', '30'),
    ]
    for name, category, price, stock in demo:
        inventory.add_product({'name': name, 'category': category, 'price': price,
                               'stock': stock, 'status': STATUS_AVAILABLE})
    logger.info('Seeded %d demo products', len(demo))
    return len(demo)
