#!/usr/bin/env python3
"""
Load the sample names into a Tamil Names SQLite database.

The schema is created (or migrated) first.  Sample rows are inserted
only when the ``names`` table is empty, so running the script twice is
harmless.

Usage:
    python seed_names.py --db ./tamil_names_api/tamil_names.db
"""

import argparse
import os
import sys

from tamil_names_api.app.core.constants import (
    CATEGORY_MODERN as MODERN,
    CATEGORY_NATURE as NATURE,
    CATEGORY_PURE_TAMIL as PURE,
    CATEGORY_UNIQUE as UNIQUE,
    FEMALE,
    MALE,
)
from tamil_names_api.app.core.db import get_connection, get_database_path, init_db

# (name, meaning, reference, gender, category, contributor, status, votes)
SAMPLE_NAMES = [
    ("அருள்மொழி", "அருளின் மொழி பேசுபவர்", "சோழ வம்சத்தில் பிரசித்தி பெற்ற பெயர்", MALE, PURE, "தமிழ் ஆர்வலர்", "admin", 45),
    ("கவிதா", "கவிதை போன்றவள்", "இலக்கியத்தில் பிரபலமான பெயர்", FEMALE, MODERN, "கவிஞர் குடும்பம்", "admin", 38),
    ("வேதன்", "வேதங்களை அறிந்தவன்", "பண்டைய தமிழ் இலக்கியம்", MALE, PURE, "வரலாற்று ஆராய்ச்சியாளர்", "admin", 52),
    ("முல்லை", "முல்லை மலர்", "குறிஞ்சி, முல்லை, மருதம், நெய்தல், பாலை", FEMALE, NATURE, "இயற்கை ஆர்வலர்", "admin", 41),
    ("தென்றல்", "மெல்லிய காற்று", "இயற்கையின் அழகிய நிகழ்வு", FEMALE, NATURE, "கவிஞர்", "admin", 33),
    ("நிலவன்", "நிலவு போன்றவன்", "நிலவின் அழகை குறிக்கும் பெயர்", MALE, UNIQUE, "ஜோதிடர்", "admin", 29),
    ("இன்பமொழி", "இனிய மொழி பேசுபவள்", "சங்க காலத்து பெயர்", FEMALE, PURE, "தமிழ் அறிஞர்", "admin", 36),
    ("அறிவன்", "அறிவு நிறைந்தவன்", "திருக்குறளில் குறிப்பிடப்பட்ட குணம்", MALE, UNIQUE, "குறள் ஆராய்ச்சியாளர்", "admin", 48),
    ("கமலா", "தாமரை மலர்", "இந்திய புராணங்களில் அழகின் சின்னம்", FEMALE, NATURE, "மலர் ஆர்வலர்", "admin", 42),
    ("ஆதிமன்", "முதல் மனிதன்", "சங்க இலக்கியத்தில் குறிப்பிடப்பட்ட பெயர்", MALE, PURE, "இலக்கிய ஆராய்ச்சியாளர்", "admin", 39),
    ("சுந்தரி", "அழகானவள்", "தமிழ் கவிதைகளில் அடிக்கடி வரும் பெயர்", FEMALE, UNIQUE, "கவிதை ஆர்வலர்", "admin", 44),
    ("வேல்", "முருகனின் ஆயுதம்", "திருமுருகனின் வேல்", MALE, PURE, "பக்தி இலக்கிய ஆர்வலர்", "admin", 37),
    ("மணி", "விலையுயர்ந்த கல்", "பண்டைய தமிழர்களின் நகைகளில் பயன்படும்", FEMALE, UNIQUE, "வரலாற்று ஆர்வலர்", "admin", 35),
    ("கார்த்திக்", "முருகப் பெருமான்", "கார்த்திகை மாதத்தில் பிறந்தவர்", MALE, PURE, "ஜோதிட ஆராய்ச்சியாளர்", "admin", 46),
    ("பூவழகி", "மலர் போல் அழகானவள்", "இயற்கையின் அழகை குறிக்கும் பெயர்", FEMALE, NATURE, "இயற்கை கவிஞர்", "admin", 40),
    # Pending names for admin review
    ("ஆகாசன்", "வானம் போன்றவன்", "விசாலமான மனம் கொண்டவன்", MALE, MODERN, "நவீன பெற்றோர்", "pending", 12),
    ("தாமரை", "புனித தாமரை மலர்", "ஆன்மிக தூய்மையின் அடையாளம்", FEMALE, NATURE, "ஆன்மிக ஆர்வலர்", "pending", 18),
    ("விக்ரம்", "வீரம் மிக்கவன்", "வீர வரலாற்றில் பிரபலமான பெயர்", MALE, UNIQUE, "வீர கதை ஆர்வலர்", "pending", 15),
    ("மீனாட்சி", "மீன் போன்ற கண்கள் கொண்டவள்", "மதுரை மீனாட்சி அம்மன்", FEMALE, PURE, "தமிழ் கலாச்சார ஆர்வலர்", "pending", 22),
    ("செல்வன்", "செல்வம் மிக்கவன்", "வளமையின் அடையாளம்", MALE, MODERN, "வணிகர் குடும்பம்", "pending", 8),
]


def seed(db_path: str) -> int:
    """Create the schema and insert the sample names into an empty table.

    Returns the number of names inserted.  Each sample vote count is
    backed by that many vote rows from ``seed-NNN`` sessions, so the
    counters agree with the ``votes`` table like any other name.
    """
    init_db(db_path)
    conn = get_connection(db_path)
    try:
        cursor = conn.cursor()
        count = cursor.execute("SELECT COUNT(*) FROM names").fetchone()[0]
        if count:
            return 0
        for name, meaning, reference, gender, category, contributor, status, votes in SAMPLE_NAMES:
            cursor.execute(
                """
                INSERT INTO names (name, meaning, reference, gender, category, contributor, status, votes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (name, meaning, reference, gender, category, contributor, status, votes),
            )
            name_id = cursor.lastrowid
            cursor.executemany(
                "INSERT INTO votes (user_session_id, name_id) VALUES (?, ?)",
                [(f"seed-{i:03d}", name_id) for i in range(votes)],
            )
        conn.commit()
        return len(SAMPLE_NAMES)
    finally:
        conn.close()


def main():
    ap = argparse.ArgumentParser(description="Seed the Tamil Names database with sample data.")
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    args = ap.parse_args()

    db_path = os.path.abspath(args.db) if args.db else get_database_path()
    inserted = seed(db_path)
    if inserted:
        print(f"[+] Inserted {inserted} sample names into {db_path}")
    else:
        print(f"[=] {db_path} already has names; nothing inserted", file=sys.stderr)


if __name__ == "__main__":
    main()
