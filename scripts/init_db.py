import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from queue_server.database import SessionLocal, Base, engine
from queue_server import models

DEFAULT_CABINETS = ["Pac-Man", "Street Fighter II", "Dance Dance Revolution"]

def ensure_cabinet(db, name):
    c = db.query(models.Cabinet).filter_by(name=name).first()
    if not c:
        c = models.Cabinet(name=name)
        db.add(c); db.commit()
    return c

if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        names = sys.argv[1:] or DEFAULT_CABINETS
        for name in names:
            ensure_cabinet(db, name)
    finally:
        db.close()
    print(f"Initialized {len(names)} cabinets.")
