from __future__ import annotations

import threading
import time

from mysql.connector import pooling

from hr_payroll.database.connection import DatabaseConnection, DBConfig


class SlowPool:
    created = 0

    def __init__(self, **kwargs):
        time.sleep(0.05)
        type(self).created += 1
        self.kwargs = kwargs

    def get_connection(self):
        return object()


def test_concurrent_first_connections_share_one_pool(monkeypatch):
    monkeypatch.setattr(pooling, "MySQLConnectionPool", SlowPool)
    SlowPool.created = 0
    db = DatabaseConnection(DBConfig("localhost", 3306, "root", "", "rrhh_motos", pool_size=3))
    barrier = threading.Barrier(8)

    def first_request():
        barrier.wait()
        db.connect()

    threads = [threading.Thread(target=first_request) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert SlowPool.created == 1
    assert db._get_pool().kwargs["pool_name"] == "hr_payroll"
    assert db._get_pool().kwargs["pool_size"] == 3
