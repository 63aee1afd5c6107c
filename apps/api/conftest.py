import pytest

from apps.api.core.config import Settings
from packages.ledger_store import LedgerStore, PasswordHasher

FAST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def api_settings(tmp_path):
    return Settings(
        APP_DATA_DIR=str(tmp_path / "appdata"),
        PASSWORD_HASH_METHOD=FAST_HASH_METHOD,
        _env_file=None,
    )


@pytest.fixture
def ledger(tmp_path):
    store = LedgerStore(
        str(tmp_path / "ledger.db"),
        pool_size=2,
        password_hasher=PasswordHasher(FAST_HASH_METHOD),
    )
    yield store
    store.close()
