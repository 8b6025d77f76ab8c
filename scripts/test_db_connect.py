import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))

from sqlalchemy import text
from sportbook.database import SessionLocal
from sportbook.models.generated import Courts, Venues


def main():
    db = SessionLocal()
    try:
        print("DB OK:", db.execute(text("SELECT 1")).scalar())
        print("Venues:", db.query(Venues).count())
        print("Courts:", db.query(Courts).count())
    finally:
        db.close()


if __name__ == "__main__":
    main()
