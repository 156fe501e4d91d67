import argparse
import logging
import os
import sys

from .config import DB_PATH, EXPORT_FOLDER, RECEIPT_FOLDER
from .db import DB
from .errors import PharmacyError
from .exports import export_products
from .inventory import Inventory, seed_demo_data, stock_level
from .orders import get_order, recent_orders
from .receipts import ReceiptWriter

logger = logging.getLogger('healthpoint_pos')


def build_parser():
    p = argparse.ArgumentParser(prog='healthpoint_pos', description='Health Point pharmacy POS tools')
    p.add_argument('--db', default=DB_PATH, help='SQLite database file')
    p.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    sub = p.add_subparsers(dest='command', required=True)
    sub.add_parser('init', help='create tables and default users')
    sub.add_parser('seed', help='insert demo products into an empty inventory')
    sub.add_parser('products', help='list inventory')
    sub.add_parser('orders', help='list recent orders')
    exp = sub.add_parser('export', help='export inventory to .csv or .xlsx')
    exp.add_argument('path', nargs='?', default=os.path.join(EXPORT_FOLDER, 'inventory.csv'))
    rec = sub.add_parser('receipt', help='write the PDF receipt of an order')
    rec.add_argument('order_id')
    rec.add_argument('--folder', default=RECEIPT_FOLDER)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    with DB(args.db) as db:
        try:
            if args.command == 'init':
                logger.info('Database ready at %s', args.db)
            elif args.command == 'seed':
                print(f'Seeded {seed_demo_data(Inventory(db))} products')
            elif args.command == 'products':
                inv = Inventory(db)
                for p in inv.list_products():
                    print(f"{inv.display_id(p)}  {p['name']:<30} {p['category']:<26} {p['price']:>8.2f} {p['stock']:>5}  {p['status']} ({stock_level(p['stock'])})")
            elif args.command == 'orders':
                for o in recent_orders(db):
                    print(f"{o['order_id']}  {o['order_date']} {o['order_time']}  {o['customer_name']:<20} {o['payment_method']:<8} {o['total_amount']:>9.2f}")
            elif args.command == 'export':
                os.makedirs(os.path.dirname(os.path.abspath(args.path)), exist_ok=True)
                print(f'Exported {export_products(db, args.path)} rows to {args.path}')
            elif args.command == 'receipt':
                print(ReceiptWriter(db, args.folder).write(get_order(db, args.order_id)))
        except PharmacyError as e:
            logger.error('%s', e)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
