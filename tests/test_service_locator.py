import pytest

from ditutorial.service_locator import ServiceLocator, ServiceNotFoundError


class _Service:
    pass


class TestRegistration:
    def test_shared_service_built_once(self) -> None:
        built: list[_Service] = []

        def factory() -> _Service:
            service = _Service()
            built.append(service)
            return service

        locator = ServiceLocator()
        locator.register("service", factory)
        assert not locator.has_instance("service")
        assert locator.get("service") is locator.get("service")
        assert len(built) == 1
        assert locator.has_instance("service")

    def test_unshared_service_built_every_time(self) -> None:
        locator = ServiceLocator()
        locator.register("service", _Service, shared=False)
        assert locator.get("service") is not locator.get("service")
        assert not locator.has_instance("service")

    def test_duplicate_key_rejected(self) -> None:
        locator = ServiceLocator()
        locator.register("service", _Service)
        with pytest.raises(ValueError, match="already registered"):
            locator.register("service", _Service)

    def test_replace_drops_cached_instance(self) -> None:
        locator = ServiceLocator()
        locator.register("service", _Service)
        first = locator.get("service")
        locator.register("service", _Service, replace=True)
        assert locator.get("service") is not first

    def test_set_registers_instance(self) -> None:
        service = _Service()
        locator = ServiceLocator()
        locator.set("service", service)
        assert locator.get("service") is service
        locator.reset()
        assert locator.get("service") is service


class TestLookup:
    def test_unknown_key_raises_key_error(self) -> None:
        locator = ServiceLocator()
        with pytest.raises(ServiceNotFoundError) as exception_info:
            locator.get("notifier")
        assert isinstance(exception_info.value, KeyError)
        assert exception_info.value.args == ("notifier",)

    def test_membership_and_length(self) -> None:
        locator = ServiceLocator()
        locator.register("a", _Service)
        locator.register("b", _Service)
        assert "a" in locator
        assert locator.has("b")
        assert "c" not in locator
        assert len(locator) == 2
        assert list(locator.keys()) == ["a", "b"]

    def test_reset_rebuilds_shared_services(self) -> None:
        locator = ServiceLocator()
        locator.register("service", _Service)
        first = locator.get("service")
        locator.reset()
        assert not locator.has_instance("service")
        assert locator.get("service") is not first
