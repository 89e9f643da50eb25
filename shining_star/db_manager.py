"""
sqlite access for the catalog, portfolio and admin accounts.

One connection per app context, opened lazily and closed on teardown.
Repositories go through query_db/execute_db and never touch the
connection directly.
"""
import os
import sqlite3
from datetime import datetime
import logging
from flask import g, current_app
import click
from flask.cli import with_appcontext
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)


def get_db():
    """Connection for the current app context, opened on first use."""
    if 'db' not in g:
        db_path = current_app.config['DATABASE_PATH']
        os.makedirs(os.path.dirname(db_path) or '.', exist_ok=True)

        g.db = sqlite3.connect(db_path)
        g.db.row_factory = sqlite3.Row
        logger.debug(f"Opened sqlite database {db_path}")
    return g.db


def close_db(e=None):
    db = g.pop('db', None)
    if db is not None:
        db.close()


def apply_schema(db):
    """Create missing tables, then seed the admin account on an empty users table."""
    with current_app.open_resource('schema.sql', mode='r') as f:
        db.executescript(f.read())
    db.commit()

    (user_count,) = db.execute('SELECT COUNT(*) FROM users').fetchone()
    if user_count == 0:
        seed_admin(db)


def seed_admin(db):
    """
    Insert the admin account named by ADMIN_USERNAME.

    Skipped unless ADMIN_PASSWORD is configured.
    """
    password = current_app.config.get('ADMIN_PASSWORD')
    if not password:
        logger.info("ADMIN_PASSWORD not set; no admin account created")
        return

    username = current_app.config.get('ADMIN_USERNAME', 'admin')
    db.execute(
        """
        INSERT INTO users (username, email, password_hash, role, name, created_at)
        VALUES (?, ?, ?, 'admin', 'Administrator', ?)
        """,
        [
            username,
            current_app.config.get('ADMIN_EMAIL'),
            generate_password_hash(password),
            datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S'),
        ]
    )
    db.commit()
    logger.info(f"Created admin account {username}")


def init_db(app):
    """Register teardown and the init-db command, and bring the schema up to date."""
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)

    with app.app_context():
        apply_schema(get_db())


def query_db(query, args=(), one=False):
    """
    Run a SELECT and return rows as dicts.

    Returns:
        List of dicts, or a single dict / None when one=True
    """
    try:
        rows = [dict(row) for row in get_db().execute(query, args).fetchall()]
    except sqlite3.Error as e:
        logger.error(f"Query failed ({e}): {' '.join(query.split())} args={args}")
        raise
    if one:
        return rows[0] if rows else None
    return rows


def execute_db(query, args=()):
    """Run a write statement, commit, and return the affected row count."""
    db = get_db()
    try:
        cursor = db.execute(query, args)
        db.commit()
    except sqlite3.Error as e:
        db.rollback()
        logger.error(f"Statement failed ({e}): {' '.join(query.split())} args={args}")
        raise
    return cursor.rowcount


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create missing tables and the initial admin account."""
    apply_schema(get_db())
    click.echo('Initialized the database.')
