import csv
import logging

from openpyxl import Workbook

from .inventory import PRODUCT_COLUMNS

logger = logging.getLogger(__name__)


def _rows(db):
    return db.query(f"SELECT {','.join(PRODUCT_COLUMNS)} FROM meds_product ORDER BY name;")


def export_products_csv(db, path):
    rows = _rows(db); headers = PRODUCT_COLUMNS
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f); w.writerow(headers)
        for r in rows: w.writerow([r.get(h, '') for h in headers])
    logger.info('Exported %d products to %s', len(rows), path)
    return len(rows)


def export_products_xlsx(db, path):
    rows = _rows(db); headers = PRODUCT_COLUMNS
    wb = Workbook(); ws = wb.active; ws.title = 'Inventory'; ws.append(headers)
    for r in rows: ws.append([r.get(h, '') for h in headers])
    wb.save(path)
    logger.info('Exported %d products to %s', len(rows), path)
    return len(rows)


def export_products(db, path):
    if path.lower().endswith('.xlsx'):
        return export_products_xlsx(db, path)
    return export_products_csv(db, path)
