import logging

from .db import hash_pw
from .errors import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

ROLES = ('admin', 'pharmacist', 'cashier')


def authenticate(db, username, password):
    user = (username or '').strip(); pwd = (password or '').strip()
    if not user or not pwd:
        raise ValidationError('Enter credentials')
    rows = db.query('SELECT id, username, password_hash, role FROM users WHERE username=?;', (user,))
    if not rows or rows[0]['password_hash'] != hash_pw(pwd):
        logger.warning('Failed login for %r', user)
        raise AuthenticationError('Invalid username or password')
    row = rows[0]
    logger.info('User %s logged in as %s', user, row['role'])
    return {'id': row['id'], 'username': row['username'], 'role': row['role']}


def add_user(db, username, password, role='cashier'):
    if not (username or '').strip() or not (password or '').strip():
        raise ValidationError('Username and password are required')
    if role not in ROLES:
        raise ValidationError(f'Unknown role {role!r}')
    return db.execute('INSERT INTO users(username,password_hash,role) VALUES(?,?,?);',
                      (username.strip(), hash_pw(password.strip()), role)).lastrowid


def change_password(db, user_id, new_password):
    pw = (new_password or '').strip()
    if not pw:
        raise ValidationError('New password is required')
    db.execute('UPDATE users SET password_hash=? WHERE id=?;', (hash_pw(pw), user_id))
