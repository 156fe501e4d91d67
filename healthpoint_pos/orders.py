import logging
from datetime import datetime

from .config import (DEFAULT_CUSTOMER, DEFAULT_PAYMENT_METHOD, ORDER_ID_CATEGORY,
                     ORDER_STATUS_COMPLETED, PAYMENT_METHODS, STATUS_AVAILABLE)
from .errors import NotFoundError, OrderPlacementError, ValidationError
from .ids import IdGenerator, exists_check

logger = logging.getLogger(__name__)


def make_line(product, quantity):
    return {
        'product_id': product['product_id'],
        'product_name': product['name'],
        'quantity': quantity,
        'unit_price': float(product['price']),
        'total_price': quantity * float(product['price']),
    }


class Cart:
    """In-memory prescription cart; one line per product."""

    def __init__(self):
        self.lines = []

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def _find(self, product_id):
        for line in self.lines:
            if line['product_id'] == product_id:
                return line
        return None

    def add(self, product, quantity=1):
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            raise ValidationError('Enter quantity > 0') from None
        if quantity <= 0:
            raise ValidationError('Enter quantity > 0')
        stock = int(product.get('stock') or 0)
        if stock <= 0:
            raise ValidationError('This medication is currently out of stock.')
        line = self._find(product['product_id'])
        in_cart = line['quantity'] if line else 0
        if in_cart + quantity > stock:
            raise ValidationError(f'Only {stock} units available in stock.')
        if line:
            line['quantity'] += quantity
            line['total_price'] = line['quantity'] * line['unit_price']
        else:
            line = make_line(product, quantity)
            self.lines.append(line)
        return line

    def remove(self, product_id):
        line = self._find(product_id)
        if line is None:
            raise NotFoundError(f'Product {product_id} is not in the cart')
        self.lines.remove(line)

    def clear(self):
        self.lines.clear()

    def total(self):
        return sum(l['total_price'] for l in self.lines)


# -----------------------
# Order placement
# -----------------------
def place_order(db, customer_name, payment_method, cart_lines, ids=None, now=datetime.now):
    """Record an order, its items and the stock decrements in one transaction.

    Returns the new order id. Any failure rolls the whole unit back and is
    raised as OrderPlacementError chained to the original exception. Stock
    levels are trusted as validated by the caller.
    """
    lines = list(cart_lines)
    if not lines:
        raise ValidationError('Please add items to cart before placing order.')
    ids = ids or IdGenerator()
    customer = (customer_name or '').strip() or DEFAULT_CUSTOMER
    total = sum(l['quantity'] * l['unit_price'] for l in lines)
    order_id = None
    con = db.connect()
    try:
        with con:
            order_id = ids.generate(ORDER_ID_CATEGORY, exists_check(db, 'orders', 'order_id'))
            ts = now()
            con.execute(
                'INSERT INTO orders(order_id,customer_name,payment_method,order_status,total_amount,order_date,order_time) VALUES(?,?,?,?,?,?,?);',
                (order_id, customer, payment_method, ORDER_STATUS_COMPLETED, total,
                 ts.strftime('%Y-%m-%d'), ts.strftime('%H:%M:%S')))
            for l in lines:
                con.execute(
                    'INSERT INTO order_items(order_id,product_id,product_name,quantity,unit_price,total_price) VALUES(?,?,?,?,?,?);',
                    (order_id, l['product_id'], l['product_name'], l['quantity'], l['unit_price'], l['quantity'] * l['unit_price']))
                con.execute('UPDATE meds_product SET stock = stock - ? WHERE product_id=?;', (l['quantity'], l['product_id']))
    except Exception as e:
        logger.error('Order %s rolled back: %s', order_id, e)
        raise OrderPlacementError(f'Failed to process prescription: {e}', order_id) from e
    logger.info('Placed order %s for %s: %d item(s), total %.2f', order_id, customer, len(lines), total)
    return order_id


def get_order(db, order_id):
    rows = db.query('SELECT * FROM orders WHERE order_id=?;', (order_id,))
    if not rows:
        raise NotFoundError(f'Order {order_id} not found')
    order = rows[0]
    order['items'] = db.query('SELECT * FROM order_items WHERE order_id=? ORDER BY id;', (order_id,))
    return order


def recent_orders(db, limit=20):
    return db.query('SELECT * FROM orders ORDER BY order_date DESC, order_time DESC LIMIT ?;', (limit,))


class Checkout:
    """Cart plus the customer/payment fields of the order screen."""

    def __init__(self, db, ids=None, receipts=None):
        self.db = db
        self.ids = ids or IdGenerator()
        self.receipts = receipts
        self.cart = Cart()
        self.customer_name = DEFAULT_CUSTOMER
        self.payment_method = DEFAULT_PAYMENT_METHOD

    def add_to_cart(self, product_id, quantity=1):
        rows = self.db.query('SELECT * FROM meds_product WHERE product_id=?;', (product_id,))
        if not rows:
            raise NotFoundError(f'Product {product_id} not found')
        if rows[0]['status'] != STATUS_AVAILABLE:
            raise ValidationError(f"{rows[0]['name']} is not available for sale ({rows[0]['status']}).")
        return self.cart.add(rows[0], quantity)

    def reset(self):
        self.cart.clear()
        self.customer_name = DEFAULT_CUSTOMER
        self.payment_method = DEFAULT_PAYMENT_METHOD

    def checkout(self):
        """Place the order for the current cart and reset the form.

        A receipt is written afterwards when a receipt writer is attached;
        failing to write it does not undo the order.
        """
        if not self.cart:
            raise ValidationError('Please add items to cart before placing order.')
        if self.payment_method not in PAYMENT_METHODS:
            raise ValidationError(f'Unknown payment method {self.payment_method!r}')
        order_id = place_order(self.db, self.customer_name, self.payment_method, self.cart.lines, ids=self.ids)
        if self.receipts is not None:
            try:
                self.receipts.write(get_order(self.db, order_id))
            except Exception:
                logger.exception('Could not generate receipt for order %s', order_id)
        self.reset()
        return order_id
