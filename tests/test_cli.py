import os

from healthpoint_pos.__main__ import main
from healthpoint_pos.db import DB
from healthpoint_pos.orders import Cart, place_order


def test_init_seed_and_list(tmp_path, capsys):
    db_path = str(tmp_path / 'cli.db')
    assert main(['--db', db_path, 'init']) == 0
    assert main(['--db', db_path, 'seed']) == 0
    assert 'Seeded 5 products' in capsys.readouterr().out
    assert main(['--db', db_path, 'products']) == 0
    out = capsys.readouterr().out
    assert 'Amoxicillin 500mg' in out
    assert 'ANB-' in out


def test_export_and_receipt(tmp_path, capsys):
    db_path = str(tmp_path / 'cli.db')
    main(['--db', db_path, 'seed'])
    with DB(db_path) as db:
        product = db.query('SELECT * FROM meds_product LIMIT 1;')[0]
        order_id = place_order(db, 'Ana', 'Cash', [Cart().add(product, 1)])

    assert main(['--db', db_path, 'export', str(tmp_path / 'inv.csv')]) == 0
    assert os.path.exists(tmp_path / 'inv.csv')

    assert main(['--db', db_path, 'orders']) == 0
    assert order_id in capsys.readouterr().out

    assert main(['--db', db_path, 'receipt', order_id, '--folder', str(tmp_path)]) == 0
    assert os.path.exists(tmp_path / f'receipt_{order_id}.pdf')


def test_unknown_order_receipt_fails(tmp_path):
    assert main(['--db', str(tmp_path / 'cli.db'), 'receipt', 'ORD-999', '--folder', str(tmp_path)]) == 1
