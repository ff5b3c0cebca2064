import pytest

from cafeConfig import CafeConfig
from orderDispatcher import OrderDispatcher


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config(tmp_path):
    cfg = CafeConfig()
    cfg.menu_csv = str(tmp_path / "menu.csv")
    cfg.inventory_csv = str(tmp_path / "inventory.csv")
    return cfg


@pytest.fixture
def cafe(config, clock):
    dispatcher = OrderDispatcher(config, clock=clock)
    dispatcher.load_sample_data()
    return dispatcher
