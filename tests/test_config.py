import pytest

from nearsky.config import Settings, load_location_conf


def test_feed_url_and_observer_from_settings():
    config = Settings(
        feed_host="192.168.1.20",
        feed_port=8080,
        feed_path="dump1090-fa/data/aircraft.json",
        observer_lat=40.0,
        observer_lon=-75.5,
    )

    assert config.feed_url == "http://192.168.1.20:8080/dump1090-fa/data/aircraft.json"
    assert config.observer.latitude == 40.0
    assert config.observer.longitude == -75.5


def test_load_location_conf_overrides_settings(tmp_path):
    conf = tmp_path / "location.conf"
    conf.write_text("server_ip=10.0.0.5\nlat=53.35\nlon=-6.26\n")
    base = Settings(feed_host="127.0.0.1", observer_lat=51.5074, observer_lon=-0.1278)

    loaded = load_location_conf(conf, base)

    assert loaded.feed_host == "10.0.0.5"
    assert loaded.observer_lat == pytest.approx(53.35)
    assert loaded.observer_lon == pytest.approx(-6.26)
    assert base.feed_host == "127.0.0.1"


def test_load_location_conf_ignores_bad_lines(tmp_path):
    conf = tmp_path / "location.conf"
    conf.write_text("# receiver\nnonsense\nlat=north\ncolour=blue\nlon=2.35\nserver_ip=\n")
    base = Settings(feed_host="127.0.0.1", observer_lat=51.5074, observer_lon=-0.1278)

    loaded = load_location_conf(conf, base)

    assert loaded.observer_lat == pytest.approx(51.5074)
    assert loaded.observer_lon == pytest.approx(2.35)
    assert loaded.feed_host == "127.0.0.1"


def test_load_location_conf_missing_file_keeps_defaults(tmp_path):
    base = Settings(feed_host="127.0.0.1")

    assert load_location_conf(tmp_path / "missing.conf", base) is base
