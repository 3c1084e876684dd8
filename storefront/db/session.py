from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

class Base(DeclarativeBase): pass

def _sqlite_fk_on(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute('PRAGMA foreign_keys=ON')
    cur.close()

def make_engine(dsn: str) -> Engine:
    if dsn.startswith('sqlite'):
        # wait on the file lock instead of failing fast
        engine = create_engine(dsn, connect_args={'check_same_thread': False, 'timeout': 30})
        event.listen(engine, 'connect', _sqlite_fk_on)
        return engine
    return create_engine(dsn, pool_pre_ping=True)

def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
