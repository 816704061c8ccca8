from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

MOODS = ("happy", "neutral", "sad")
ENTRY_TYPES = ("thoughts", "activity")


def _in_clause(column, values):
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Entry(db.Model):
    __tablename__ = "entries"
    __table_args__ = (
        db.CheckConstraint(_in_clause("mood", MOODS), name="ck_entries_mood"),
        db.CheckConstraint(_in_clause("type", ENTRY_TYPES), name="ck_entries_type"),
    )

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)

    # Stamped from the submitting client's local clock, never recomputed here
    date = db.Column(db.String(10), nullable=False)   # YYYY-MM-DD
    time = db.Column(db.String(5), nullable=False)    # HH:MM

    mood = db.Column(db.String(7), nullable=False)
    type = db.Column(db.String(8), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "date": self.date,
            "time": self.time,
            "mood": self.mood,
            "type": self.type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Entry id={self.id} type={self.type}>"
