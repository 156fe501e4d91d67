import logging
import os

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas as pdf_canvas

from .config import CURRENCY, DEFAULT_SETTINGS, RECEIPT_FOLDER

logger = logging.getLogger(__name__)

# Helvetica has no peso sign
_PDF_CURRENCY = 'PHP ' if CURRENCY == '₱' else CURRENCY


def money(amount): return f'{_PDF_CURRENCY}{amount:.2f}'


class ReceiptWriter:
    """Writes one PDF receipt per finalized order."""

    def __init__(self, db, folder=RECEIPT_FOLDER):
        self.db = db
        self.folder = folder

    def path_for(self, order_id):
        return os.path.join(self.folder, f'receipt_{order_id}.pdf')

    def write(self, order):
        os.makedirs(self.folder, exist_ok=True)
        pharmacy_name = self.db.get_setting('pharmacy_name', DEFAULT_SETTINGS['pharmacy_name'])
        pharmacy_address = self.db.get_setting('pharmacy_address', '')
        filepath = self.path_for(order['order_id'])

        c = pdf_canvas.Canvas(filepath, pagesize=A4); width, height = A4
        c.setTitle(f"Receipt {order['order_id']}")
        y = height - 60
        c.setFont('Helvetica-Bold', 16); c.drawCentredString(width/2, y, pharmacy_name); y -= 18
        if pharmacy_address:
            c.setFont('Helvetica', 10); c.drawCentredString(width/2, y, pharmacy_address); y -= 16
        c.line(40, y, width-40, y); y -= 14
        c.setFont('Helvetica', 10)
        c.drawString(40, y, f"Order ID: {order['order_id']}")
        c.drawRightString(width-40, y, f"Date: {order['order_date']} {order['order_time']}"); y -= 12
        c.drawString(40, y, f"Customer: {order['customer_name']}"); y -= 12
        c.drawString(40, y, f"Payment: {order['payment_method']}"); y -= 12
        c.drawString(40, y, f"Status: {order['order_status']}"); y -= 12
        c.line(40, y, width-40, y); y -= 14

        c.setFont('Helvetica-Bold', 10)
        c.drawString(40, y, 'Item'); c.drawRightString(width-200, y, 'Qty'); c.drawRightString(width-120, y, 'Price'); c.drawRightString(width-40, y, 'Subtotal'); y -= 12
        c.setFont('Helvetica', 10)
        for it in order.get('items', []):
            c.drawString(40, y, str(it['product_name']))
            c.drawRightString(width-200, y, str(it['quantity']))
            c.drawRightString(width-120, y, money(it['unit_price']))
            c.drawRightString(width-40, y, money(it['total_price']))
            y -= 12
            if y < 80:
                c.showPage(); y = height - 60
                c.setFont('Helvetica', 10)
        c.line(40, y, width-40, y); y -= 16
        c.setFont('Helvetica-Bold', 12); c.drawRightString(width-40, y, f"TOTAL: {money(order['total_amount'])}"); y -= 24
        c.setFont('Helvetica', 10); c.drawCentredString(width/2, y, 'Thank you for trusting Health Point!')
        c.save()
        logger.info('Receipt for order %s saved to %s', order['order_id'], filepath)
        return filepath
