"""Usage walkthrough: ``python -m sqlitepp``.

Runs every wrapper operation once against the configured database (an
in-memory one by default) and prints one status line per step.
"""

from __future__ import annotations

import sys
from typing import TextIO

from sqlitepp import __version__
from sqlitepp.application import Database, Query, Transaction
from sqlitepp.infrastructure.container import Container


def run_demo(db: Database, out: TextIO | None = None) -> None:
    """Exercise connection, query, result and transaction operations."""
    if out is None:
        out = sys.stdout

    def report(message: str) -> None:
        print(f"test - {message}", file=out)

    report(f"SQLite3  version: {db.version()}")
    report(f"sqlitepp version: {__version__}")

    # query ctor; fails on a fresh database since the table does not exist
    qc = Query(db, "DROP TABLE test;")
    err = qc.exec()
    report(f"query ctor: {int(err)}")

    # exec(sql) replaces the text given to the constructor
    q = Query(db, "THIS QUERY SHOULD GET DISCARDED")
    err = q.exec(
        "CREATE TABLE test (id INTEGER PRIMARY KEY NOT NULL, num INTEGER, "
        "name VARCHAR(20), flo FLOAT, data BLOB, comment TEXT);"
    )
    report(f"query exec: {int(err)}")

    blob = bytes(range(30))
    q.bind(1, blob)
    err = q.exec("INSERT INTO test (data) VALUES (?1)")
    report(f"insert BLOB via bind: {int(err)}, id: {q.insert_id()}")

    q << "INSERT INTO test (data) VALUES (?)" << blob
    err = q.exec()
    report(f"insert BLOB via <<: {int(err)}, id: {q.insert_id()}")

    q << "INSERT INTO test (comment) VALUES (@com)"
    q.bind("@com", "Test")
    err = q.exec()
    report(f"insert TEXT via alpha bind: {int(err)}, id: {q.insert_id()}")

    q << "INSERT INTO test(name, data, comment) VALUES ('Test',?,?)"
    q.bind(1, bytes([0x55] * 10))
    q.bind(2, "A test text")
    err = q.exec()
    report(f"insert multiple binds: {int(err)}, id: {q.insert_id()}")

    q << "INSERT INTO test (num, flo) VALUES(" << 1000 << "," << 3.1415 << ")"
    err = q.exec()
    report(f"insert: {int(err)}, id: {q.insert_id()}")

    q << "INSERT INTO test(id, name) VALUES (13,'" << "Schöne Grüße" << "')"
    err = q.exec()
    report(f"insert: {int(err)}, id: {q.insert_id()}, affected rows: {q.affected_rows()}")

    # statement assembled over several appends
    q << "UPDATE test SET num="
    q << 10
    q << " WHERE id=2"
    err = q.exec()
    report(f"update: {int(err)}, affected rows: {q.affected_rows()}")

    err = db.vacuum()
    report(f"defragmentation: {int(err)}")

    q << "SELECT * FROM test"
    res = q.store()
    report(f"result: Got {res.num_rows()} rows")

    num = int(res[1]["num"])
    flo_is_null = res[0]["flo"].is_null()
    data = bytes(res[0][4])
    comment = res[2]["comment"].as_text()
    report(f"fields: num={num} flo_is_null={flo_is_null} data={len(data)} bytes comment={comment}")

    for row in res:
        print("".join(f"{field} |" for field in row if not field.is_null()), file=out)

    # same, but row by row
    q << "SELECT * FROM test"
    row = q.use()
    while not row.empty():
        print("".join(f"{field} |" for field in row if not field.is_null()), file=out)
        row = q.use_next()

    # first row only; the stream must be released
    q << "SELECT * FROM test"
    row = q.use()
    q.use_abort()

    tr = Transaction(db)
    q.exec("INSERT INTO test(name) VALUES ('Marco')")
    tr.commit()

    tr.begin()
    q.exec("INSERT INTO test(name) VALUES ('I''m not stored')")
    tr.rollback()

    with Transaction(db):
        q.exec("INSERT INTO test(name) VALUES ('I''m not stored either')")
        # rolled back when the block ends

    q << "SELECT name FROM test WHERE name IS NOT NULL ORDER BY id"
    names = [row["name"].as_text() for row in q.store()]
    report(f"transactions: stored names {names}")


def main() -> int:
    """Entry point for the ``sqlitepp-demo`` script."""
    container = Container.create()
    with Database.from_config(container.config, metrics=container.metrics) as db:
        run_demo(db)
    return 0


if __name__ == "__main__":
    sys.exit(main())
