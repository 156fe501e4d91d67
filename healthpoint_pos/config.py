import os

# paths
DB_PATH = os.environ.get('HEALTHPOINT_DB') or os.path.join(os.getcwd(), 'pharmacy.db')
RECEIPT_FOLDER = os.path.join(os.getcwd(), 'receipts')
EXPORT_FOLDER = os.path.join(os.getcwd(), 'exports')

# ids
UNKNOWN_CODE = 'UNK'
CODE_FILLER = 'X'
MAX_ID_ATTEMPTS = 100
ID_RETRY_DELAY = 0.001
ORDER_ID_CATEGORY = 'Order'

# products
PRODUCT_STATUSES = ('Available', 'Out of Stock', 'Discontinued', 'Low Stock')
STATUS_AVAILABLE = 'Available'
LOW_STOCK_THRESHOLD = 5
ALL_CATEGORIES = 'All Categories'

# orders
PAYMENT_METHODS = ('Cash', 'Card', 'GCash', 'Gothyme')
DEFAULT_PAYMENT_METHOD = 'Cash'
DEFAULT_CUSTOMER = 'None'
ORDER_STATUS_COMPLETED = 'Completed'
CURRENCY = '₱'

# settings seeded into the database on first run
DEFAULT_SETTINGS = {
    'pharmacy_name': 'Health Point Pharmacy',
    'pharmacy_address': '123 Main Street, City',
}
