from hlsstitch.services.stitcher import StreamRegistry


def test_registry_add_remove() -> None:
    registry = StreamRegistry()

    registry.add("cam1")
    registry.add("cam2")
    registry.add("cam1")

    assert registry.names == ["cam1", "cam2"]
    assert len(registry) == 2
    assert "cam2" in registry
    assert registry.latest() == "cam2"

    assert registry.remove("cam2") is True
    assert registry.remove("cam2") is False
    assert registry.latest() == "cam1"


def test_registry_empty() -> None:
    registry = StreamRegistry()

    assert registry.latest() is None
    assert "cam1" not in registry


def test_registry_names_is_a_copy() -> None:
    registry = StreamRegistry()
    registry.add("cam1")

    registry.names.append("cam2")

    assert registry.names == ["cam1"]
