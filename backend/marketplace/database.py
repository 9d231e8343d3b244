import sqlite3
import uuid
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from marketplace.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- USERS / ROLES / TOKENS
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    id            TEXT PRIMARY KEY,
    name          TEXT NOT NULL,
    username      TEXT NOT NULL UNIQUE,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    is_active     INTEGER NOT NULL DEFAULT 1,
    last_login_at TEXT,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS roles (
    id    TEXT PRIMARY KEY,
    code  TEXT NOT NULL UNIQUE,
    label TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS user_roles (
    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    role_id TEXT NOT NULL REFERENCES roles(id) ON DELETE CASCADE,
    PRIMARY KEY (user_id, role_id)
);

CREATE TABLE IF NOT EXISTS auth_tokens (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    token      TEXT NOT NULL UNIQUE,
    token_type TEXT NOT NULL CHECK(token_type IN ('REFRESH')),
    expires_at TEXT NOT NULL,
    is_revoked INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_auth_tokens_user ON auth_tokens(user_id);

-- ============================================================
-- BUSINESSES
-- ============================================================
CREATE TABLE IF NOT EXISTS businesses (
    id          TEXT PRIMARY KEY,
    owner_id    TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    name        TEXT NOT NULL,
    logo_url    TEXT,
    website_url TEXT,
    description TEXT,
    status      TEXT NOT NULL DEFAULT 'PENDING'
                CHECK(status IN ('PENDING','APPROVED','REJECTED')),
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_businesses_owner ON businesses(owner_id);
CREATE INDEX IF NOT EXISTS idx_businesses_status ON businesses(status);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS job_statuses (
    id          TEXT PRIMARY KEY,
    code        TEXT NOT NULL UNIQUE
                CHECK(code IN ('ACTIVE','SUSPENDED','ARCHIVED')),
    label       TEXT NOT NULL,
    description TEXT
);

CREATE TABLE IF NOT EXISTS job_posts (
    id                          TEXT PRIMARY KEY,
    business_id                 TEXT NOT NULL REFERENCES businesses(id) ON DELETE CASCADE,
    job_status_id               TEXT NOT NULL REFERENCES job_statuses(id),
    title                       TEXT NOT NULL,
    slug                        TEXT NOT NULL UNIQUE,
    location_type               TEXT NOT NULL,
    location_text               TEXT,
    employment_type             TEXT NOT NULL,
    salary_min                  INTEGER,
    salary_max                  INTEGER,
    currency                    TEXT,
    description                 TEXT NOT NULL,
    requirements                TEXT,
    application_option_platform INTEGER NOT NULL DEFAULT 1,
    application_option_external INTEGER NOT NULL DEFAULT 0,
    external_apply_url          TEXT,
    external_apply_email        TEXT,
    published_at                TEXT,
    expires_at                  TEXT,
    created_at                  TEXT NOT NULL,
    updated_at                  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_job_posts_business ON job_posts(business_id);
CREATE INDEX IF NOT EXISTS idx_job_posts_status ON job_posts(job_status_id);
CREATE INDEX IF NOT EXISTS idx_job_posts_employment ON job_posts(employment_type);

CREATE TABLE IF NOT EXISTS job_applications (
    id                   TEXT PRIMARY KEY,
    job_post_id          TEXT NOT NULL REFERENCES job_posts(id) ON DELETE CASCADE,
    user_id              TEXT REFERENCES users(id) ON DELETE SET NULL,
    applicant_name       TEXT,
    applicant_email      TEXT,
    application_method   TEXT NOT NULL CHECK(application_method IN ('PLATFORM','EXTERNAL')),
    status               TEXT NOT NULL CHECK(status IN ('SUBMITTED','CLICKED')),
    cv_url               TEXT,
    resume_url           TEXT,
    portfolio_url        TEXT,
    cover_letter         TEXT,
    external_target      TEXT,
    external_destination TEXT,
    external_clicked_at  TEXT,
    created_at           TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_job_applications_job ON job_applications(job_post_id);
CREATE INDEX IF NOT EXISTS idx_job_applications_user ON job_applications(user_id);

-- ============================================================
-- CONTRIBUTORS / ARTICLES
-- ============================================================
CREATE TABLE IF NOT EXISTS contributor_profiles (
    id           TEXT PRIMARY KEY,
    user_id      TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
    status       TEXT NOT NULL DEFAULT 'ACTIVE'
                 CHECK(status IN ('ACTIVE','SUSPENDED')),
    bio          TEXT,
    social_links TEXT,
    created_at   TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS articles (
    id              TEXT PRIMARY KEY,
    author_id       TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    title           TEXT NOT NULL,
    slug            TEXT NOT NULL UNIQUE,
    excerpt         TEXT,
    content         TEXT NOT NULL,
    cover_image_url TEXT,
    status          TEXT NOT NULL
                    CHECK(status IN ('PUBLISHED','SUSPENDED','ARCHIVED')),
    published_at    TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_articles_author ON articles(author_id);
CREATE INDEX IF NOT EXISTS idx_articles_status ON articles(status);

-- ============================================================
-- EVENTS / REGISTRATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS events (
    id               TEXT PRIMARY KEY,
    creator_id       TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    title            TEXT NOT NULL,
    slug             TEXT NOT NULL UNIQUE,
    type             TEXT NOT NULL,
    description      TEXT NOT NULL,
    location         TEXT NOT NULL,
    start_datetime   TEXT NOT NULL,
    end_datetime     TEXT NOT NULL,
    is_paid          INTEGER NOT NULL DEFAULT 0,
    price_per_person INTEGER,
    admin_fee        INTEGER NOT NULL DEFAULT 0,
    quota            INTEGER,
    status           TEXT NOT NULL
                     CHECK(status IN ('DRAFT','PUBLISHED','CANCELLED','ARCHIVED')),
    published_at     TEXT,
    created_at       TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_events_creator ON events(creator_id);
CREATE INDEX IF NOT EXISTS idx_events_status ON events(status);
CREATE INDEX IF NOT EXISTS idx_events_start ON events(start_datetime);

CREATE TABLE IF NOT EXISTS event_registrations (
    id           TEXT PRIMARY KEY,
    event_id     TEXT NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    user_id      TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    status       TEXT NOT NULL
                 CHECK(status IN ('PENDING_PAYMENT','CONFIRMED','REJECTED')),
    total_amount INTEGER NOT NULL DEFAULT 0,
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_event_registrations_event ON event_registrations(event_id, status);
CREATE INDEX IF NOT EXISTS idx_event_registrations_user ON event_registrations(user_id);

-- ============================================================
-- PAYMENTS
-- ============================================================
CREATE TABLE IF NOT EXISTS payments (
    id                    TEXT PRIMARY KEY,
    user_id               TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    payment_type          TEXT NOT NULL,
    amount                INTEGER NOT NULL,
    reference_code        TEXT,
    screenshot_url        TEXT,
    status                TEXT NOT NULL DEFAULT 'PENDING'
                          CHECK(status IN ('PENDING','VERIFIED','REJECTED')),
    verified_by_id        TEXT REFERENCES users(id) ON DELETE SET NULL,
    verified_at           TEXT,
    event_registration_id TEXT REFERENCES event_registrations(id) ON DELETE SET NULL,
    event_id              TEXT REFERENCES events(id) ON DELETE SET NULL,
    business_id           TEXT REFERENCES businesses(id) ON DELETE SET NULL,
    job_post_id           TEXT REFERENCES job_posts(id) ON DELETE SET NULL,
    created_at            TEXT NOT NULL,
    updated_at            TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_payments_user ON payments(user_id);
CREATE INDEX IF NOT EXISTS idx_payments_status ON payments(status);
CREATE INDEX IF NOT EXISTS idx_payments_event ON payments(event_id);
"""


ROLE_SEED = [
    ("ADMIN", "Administrator"),
    ("USER", "User"),
]

JOB_STATUS_SEED = [
    ("ACTIVE", "Active", "Job is visible to users and open for applications"),
    ("SUSPENDED", "Suspended", "Job is temporarily hidden and cannot receive new applications"),
    ("ARCHIVED", "Archived", "Job is closed and archived"),
]


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    # Reference rows are keyed by code; re-running only refreshes labels
    for code, label in ROLE_SEED:
        conn.execute(
            "INSERT INTO roles (id, code, label) VALUES (?, ?, ?) "
            "ON CONFLICT(code) DO UPDATE SET label = excluded.label",
            (str(uuid.uuid4()), code, label),
        )
    for code, label, description in JOB_STATUS_SEED:
        conn.execute(
            "INSERT INTO job_statuses (id, code, label, description) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(code) DO UPDATE SET label = excluded.label, description = excluded.description",
            (str(uuid.uuid4()), code, label, description),
        )
    conn.commit()
    conn.close()
