import os
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.append(str(Path(__file__).resolve().parent / "backend"))


# ======================================================
# ENV
# ======================================================

load_dotenv()

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin")

if not ADMIN_EMAIL:
    raise RuntimeError("ADMIN_EMAIL is not set")

ADMIN_EMAIL = ADMIN_EMAIL.strip().lower()


# ======================================================
# MAIN LOGIC
# ======================================================

def main():
    from sportbook.database import SessionLocal, engine
    from sportbook.models.generated import Base, Users

    # --- ensure schema ---
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = db.query(Users).filter(Users.email == ADMIN_EMAIL).first()

        # ==================================================
        # CASE 1: NEW ADMIN
        # ==================================================
        if not user:
            db.add(Users(full_name=ADMIN_NAME, email=ADMIN_EMAIL, role="admin"))
            print(f"[BOOTSTRAP] Admin created ({ADMIN_EMAIL})")

        # ==================================================
        # CASE 2: EXISTING USER
        # ==================================================
        elif user.role != "admin":
            user.role = "admin"
            user.is_banned = 0
            print(f"[BOOTSTRAP] Admin role granted ({ADMIN_EMAIL})")

        else:
            print("[BOOTSTRAP] Admin already exists, nothing to do")

        db.commit()
    finally:
        db.close()


# ======================================================
# ENTRYPOINT
# ======================================================

if __name__ == "__main__":
    main()
