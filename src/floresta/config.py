import os
from pathlib import Path

from dotenv import load_dotenv
from psycopg2.extensions import make_dsn

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = DATA_DIR / "outputs"

# OpLexicon v3.0 layout: Attribute,Type,Class,ClassificationType
LEXICON_CSV = Path(os.getenv("FLORESTA_LEXICON", DATA_DIR / "oplexicon_v3.0" / "lexico_v3.0.txt"))
SAMPLES_JSON = Path(os.getenv("FLORESTA_SAMPLES", DATA_DIR / "twitter.json"))
RESULTS_CSV = OUTPUT_DIR / "scored_samples.csv"

TEXT_FIELD = os.getenv("FLORESTA_TEXT_FIELD", "Tweet")
MIN_TOKEN_LENGTH = int(os.getenv("FLORESTA_MIN_TOKEN_LENGTH", "3"))

DB_TABLE = os.getenv("FLORESTA_DB_TABLE", "arvores")
DB_LIMIT = int(os.getenv("FLORESTA_DB_LIMIT", "10"))

LOG_LEVEL = os.getenv("FLORESTA_LOG_LEVEL", "INFO")

_PG_KEYS = {
    "host": "PGHOST",
    "port": "PGPORT",
    "user": "PGUSER",
    "password": "PGPASSWORD",
    "dbname": "PGDATABASE",
    "sslmode": "PGSSLMODE",
}


def postgres_connection_string() -> str:
    """DSN for the diagnostic datastore read; empty when nothing is configured."""
    url = os.getenv("FLORESTA_DATABASE_URL", "")
    if url:
        return url
    params = {key: os.getenv(env) for key, env in _PG_KEYS.items() if os.getenv(env)}
    if not params:
        return ""
    return make_dsn(**params)
