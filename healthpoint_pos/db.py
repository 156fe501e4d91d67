import hashlib
import logging
import sqlite3
from datetime import datetime

from .config import DB_PATH, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

# tables an existence probe may look at
_ID_COLUMNS = {
    'meds_product': ('product_id',),
    'orders': ('order_id',),
}


# -----------------------
# Utilities & DB Layer
# -----------------------
def hash_pw(pw: str) -> str:
    return hashlib.sha256(pw.encode()).hexdigest()

def now_str(dt=None): return (dt or datetime.now()).strftime('%Y-%m-%d %H:%M:%S')


class DB:
    """Shared SQLite connection for the whole process.

    The connection is opened lazily on first use and kept until ``close()``.
    ``with db.connect() as con:`` is one unit of work: sqlite3 commits when
    the block exits cleanly and rolls back when it raises.
    """

    def __init__(self, path=DB_PATH):
        self.path = path
        self._con = None
        self._ensure()

    def connect(self):
        if self._con is None:
            con = sqlite3.connect(self.path, detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES)
            con.row_factory = sqlite3.Row
            con.execute('PRAGMA foreign_keys = ON;')
            self._con = con
            logger.debug('Opened database %s', self.path)
        return self._con

    def close(self):
        if self._con is not None:
            self._con.close()
            self._con = None
            logger.debug('Closed database %s', self.path)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _ensure(self):
        con = self.connect(); cur = con.cursor()
        cur.execute('''CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE,
            password_hash TEXT,
            role TEXT CHECK(role IN ('admin','pharmacist','cashier')) NOT NULL
        );''')
        cur.execute('SELECT COUNT(*) as c FROM users;')
        if cur.fetchone()['c'] == 0:
            cur.executemany('INSERT INTO users(username,password_hash,role) VALUES(?,?,?);', [
                ('admin', hash_pw('admin123'), 'admin'),
                ('cashier', hash_pw('cashier123'), 'cashier'),
            ])
        cur.execute('''CREATE TABLE IF NOT EXISTS meds_product (
            product_id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            category TEXT,
            price REAL DEFAULT 0,
            stock INTEGER DEFAULT 0,
            status TEXT,
            image_path TEXT DEFAULT '',
            date_added TEXT
        );''')
        cur.execute('''CREATE TABLE IF NOT EXISTS orders (
            order_id TEXT PRIMARY KEY,
            customer_name TEXT,
            payment_method TEXT,
            order_status TEXT,
            total_amount REAL NOT NULL,
            order_date TEXT,
            order_time TEXT
        );''')
        cur.execute('''CREATE TABLE IF NOT EXISTS order_items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            order_id TEXT NOT NULL,
            product_id INTEGER NOT NULL,
            product_name TEXT,
            quantity INTEGER NOT NULL,
            unit_price REAL NOT NULL,
            total_price REAL NOT NULL,
            FOREIGN KEY(order_id) REFERENCES orders(order_id) ON DELETE CASCADE
        );''')
        # settings
        cur.execute('''CREATE TABLE IF NOT EXISTS settings (key TEXT PRIMARY KEY, value TEXT);''')
        def set_if_missing(k, v):
            cur.execute('SELECT value FROM settings WHERE key=?;', (k,))
            if not cur.fetchone(): cur.execute('INSERT INTO settings(key,value) VALUES(?,?);', (k, str(v)))
        for k, v in DEFAULT_SETTINGS.items():
            set_if_missing(k, v)
        con.commit()

    def query(self, sql, params=()):
        cur = self.connect().execute(sql, params)
        return [dict(r) for r in cur.fetchall()]

    def execute(self, sql, params=()):
        with self.connect() as con:
            return con.execute(sql, params)

    def exists(self, table, column, value):
        if column not in _ID_COLUMNS.get(table, ()):
            raise ValueError(f'No id column {table}.{column}')
        row = self.connect().execute(f'SELECT COUNT(*) AS c FROM {table} WHERE {column}=?;', (value,)).fetchone()
        return row['c'] > 0

    def get_setting(self, key, default=''):
        rows = self.query('SELECT value FROM settings WHERE key=?;', (key,))
        return rows[0]['value'] if rows else default

    def set_setting(self, key, value):
        self.execute('INSERT OR REPLACE INTO settings(key,value) VALUES(?,?);', (key, str(value)))
