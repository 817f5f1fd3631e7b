import os
import sys
import sqlite3

# Resolve project root so core.config imports when run as a script
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from core.config import load_settings  # noqa: E402

DB = load_settings().db_path
print('DB:', DB, 'exists:', os.path.exists(DB))
if not os.path.exists(DB):
    sys.exit(1)

con = sqlite3.connect(DB)
cur = con.cursor()
cur.execute("PRAGMA table_info('patient_records')")
cols = [r[1] for r in cur.fetchall()]
print('patient_records cols:', cols)
cur.execute("SELECT status, COUNT(*) FROM patient_records GROUP BY status")
print('by status:', dict(cur.fetchall()))
cur.execute("SELECT id, name, age, severity, checkup, visit_time, status FROM patient_records ORDER BY id DESC LIMIT 10")
for r in cur.fetchall():
    print(r)
con.close()
