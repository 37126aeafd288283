import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.orders import providers
from apps.orders.domain import StorageUnavailable


@pytest.mark.django_db
def test_wait_for_db_returns_when_store_answers(capsys):
    call_command("wait_for_db", timeout=1)
    assert "Database ready after 1 attempt(s)" in capsys.readouterr().out


def test_wait_for_db_gives_up(monkeypatch):
    class DownStorage:
        alias = "default"
        closed = 0

        def ping(self):
            raise StorageUnavailable("could not connect")

        def close(self):
            DownStorage.closed += 1

    monkeypatch.setattr(providers, "get_storage", lambda: DownStorage())
    with pytest.raises(CommandError):
        call_command("wait_for_db", timeout=0, interval=0)
    assert DownStorage.closed >= 1
