"""
Unit tests for container models.

Tests Container base behaviour, LiquidContainer, GasContainer,
RefrigeratedContainer and ContainerSnapshot.
"""

from dataclasses import FrozenInstanceError
import threading

import pytest
from cargoship.containers.models import (
    ContainerKind,
    Container,
    ContainerSnapshot,
    LiquidContainer,
    GasContainer,
    RefrigeratedContainer,
    OVERFILL_HAZARD_MESSAGE,
)
from cargoship.errors import InvalidLoadError, InvalidParameterError, OverfillError


class TestContainerKind:
    """Tests for ContainerKind enum."""

    def test_all_kinds_exist(self):
        assert ContainerKind.LIQUID.value == "liquid"
        assert ContainerKind.GAS.value == "gas"
        assert ContainerKind.REFRIGERATED.value == "refrigerated"

    def test_type_codes(self):
        assert ContainerKind.LIQUID.type_code == "L"
        assert ContainerKind.GAS.type_code == "G"
        assert ContainerKind.REFRIGERATED.type_code == "C"


class TestContainerBase:
    """Tests for behaviour shared by every container."""

    def test_base_is_abstract(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            Container(100)

    def test_new_container_is_empty(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        assert container.current_load == 0.0
        assert container.max_payload == 150.0
        assert container.ship is None
        assert container.is_aboard is False

    def test_derived_weights(self, allocator):
        """Test base weight is a tenth of max payload and total adds the load."""
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        assert container.base_weight == 15.0
        assert container.total_weight == 15.0

        container.load(140)
        assert container.total_weight == 155.0

    def test_derived_weights_follow_load_changes(self, allocator):
        """Test total weight is recomputed after every load and unload."""
        container = RefrigeratedContainer(100, "Fish", -18, allocator=allocator)
        container.load(50)
        assert container.total_weight == 60.0
        container.unload()
        assert container.total_weight == 10.0

    def test_load_accumulates(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(40)
        container.load(60)
        assert container.current_load == 100.0

    def test_load_up_to_max_payload(self, allocator):
        """Test loading exactly to max payload succeeds."""
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(150)
        assert container.current_load == 150.0

    def test_overfill_raises_and_keeps_load(self, allocator):
        """Test an overfill raises OverfillError and leaves the load unchanged."""
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(140)

        with pytest.raises(OverfillError) as exc_info:
            container.load(11)

        assert container.current_load == 140.0
        error = exc_info.value
        assert error.source_id == container.serial_number
        assert error.current_load == 140.0
        assert error.amount == 11.0
        assert error.max_payload == 150.0

    @pytest.mark.parametrize("amount", [-1, -0.001, float("nan"), "lots", None])
    def test_invalid_amount_rejected(self, allocator, amount):
        """Test negative or non-numeric amounts raise InvalidLoadError."""
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(10)
        with pytest.raises(InvalidLoadError):
            container.load(amount)
        assert container.current_load == 10.0

    def test_unload_empties(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(100)
        container.unload()
        assert container.current_load == 0.0

    @pytest.mark.parametrize("max_payload", [0, -10, float("inf"), "heavy", None])
    def test_invalid_max_payload(self, allocator, max_payload):
        with pytest.raises(InvalidParameterError) as exc_info:
            RefrigeratedContainer(max_payload, "Bananas", -5, allocator=allocator)
        assert exc_info.value.param == "max_payload"

    def test_load_only_changes_through_operations(self, allocator):
        """Test load never decreases except via unload, never increases except via load."""
        container = RefrigeratedContainer(100, "Apples", 4, allocator=allocator)
        previous = container.current_load

        for amount in [10, 30, 70, 5, 0, 55]:
            try:
                container.load(amount)
            except OverfillError:
                assert container.current_load == previous
            assert container.current_load >= previous
            container.describe()
            container.snapshot()
            assert container.current_load == previous + amount or container.current_load == previous
            previous = container.current_load

        assert previous == 100.0

    def test_concurrent_loads(self, allocator):
        """Test loads from many threads are all applied."""
        container = RefrigeratedContainer(1000, "Grain", 10, allocator=allocator)

        def worker():
            for _ in range(100):
                container.load(1)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert container.current_load == 1000.0


class TestDescribe:
    """Tests for describe() and snapshot()."""

    def test_describe_format(self, allocator):
        container = LiquidContainer(200, True, allocator=allocator)
        assert container.describe() == (
            "Container KON-L-1, Load: 0/200, BaseWeight: 20, TotalWeight: 20"
        )

    def test_describe_after_load(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(140)
        assert container.describe() == (
            "Container KON-C-1, Load: 140/150, BaseWeight: 15, TotalWeight: 155"
        )

    def test_str_is_describe(self, allocator):
        container = GasContainer(100, 5, allocator=allocator)
        assert str(container) == container.describe()

    def test_describe_does_not_mutate(self, allocator):
        """Test describing a container leaves its state unchanged."""
        container = GasContainer(100, 5, allocator=allocator)
        container.load(30)
        before = container.snapshot()
        container.describe()
        container.describe()
        assert container.snapshot() == before
        assert container.current_load == 30.0

    def test_snapshot_values(self, allocator):
        container = GasContainer(100, 5, allocator=allocator)
        container.load(80)
        snap = container.snapshot()

        assert isinstance(snap, ContainerSnapshot)
        assert snap.serial_number == "KON-G-1"
        assert snap.kind == ContainerKind.GAS
        assert snap.current_load == 80.0
        assert snap.max_payload == 100.0
        assert snap.base_weight == 10.0
        assert snap.total_weight == 90.0
        assert snap.fill_fraction == 0.8

    def test_snapshot_is_frozen(self, allocator):
        snap = GasContainer(100, 5, allocator=allocator).snapshot()
        with pytest.raises(FrozenInstanceError):
            snap.current_load = 50.0

    def test_snapshot_is_point_in_time(self, allocator):
        """Test a snapshot does not follow later load changes."""
        container = GasContainer(100, 5, allocator=allocator)
        snap = container.snapshot()
        container.load(50)
        assert snap.current_load == 0.0
        assert container.snapshot().current_load == 50.0

    def test_to_dict(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        container.load(75)
        d = container.to_dict()

        assert d["serial_number"] == "KON-C-1"
        assert d["kind"] == "refrigerated"
        assert d["current_load"] == 75.0
        assert d["base_weight"] == 15.0
        assert d["total_weight"] == 90.0
        assert d["fill_percent"] == 50.0
        assert d["ship"] is None
        assert d["attributes"] == {"product_type": "Bananas", "temperature": -5.0}


class TestLiquidContainer:
    """Tests for LiquidContainer fill limits and hazard notification."""

    def test_attributes(self, allocator, recorder):
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        assert container.kind == ContainerKind.LIQUID
        assert container.is_hazardous is True
        assert container.fill_limit == 100.0
        assert container.serial_number == "KON-L-1"

    def test_hazardous_overfill_notifies(self, allocator, recorder):
        """Test hazardous liquid past 50% notifies and keeps its load."""
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        container.load(100)
        container.load(60)

        assert container.current_load == 100.0
        assert recorder.event_count == 1
        event = recorder.events[0]
        assert event.message == OVERFILL_HAZARD_MESSAGE
        assert event.source_id == container.serial_number

    def test_hazardous_fill_to_limit(self, allocator, recorder):
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        container.load(50)
        container.load(50)
        assert container.current_load == 100.0
        assert recorder.event_count == 0

    def test_non_hazardous_limit_is_90_percent(self, allocator, recorder):
        """Test non-hazardous liquid accepts up to 90% of max payload."""
        container = LiquidContainer(200, False, allocator=allocator, hazard_sink=recorder)
        assert container.fill_limit == 180.0

        container.load(100)
        container.load(80)
        assert container.current_load == 180.0
        assert recorder.event_count == 0

        container.load(0.5)
        assert container.current_load == 180.0
        assert recorder.event_count == 1

    def test_over_limit_does_not_raise(self, allocator, recorder):
        """Test the over-limit path diverts to a notification, not an error."""
        container = LiquidContainer(200, False, allocator=allocator, hazard_sink=recorder)
        container.load(500)
        assert container.current_load == 0.0
        assert recorder.event_count == 1

    def test_every_rejected_load_notifies(self, allocator, recorder):
        container = LiquidContainer(100, True, allocator=allocator, hazard_sink=recorder)
        container.load(60)
        container.load(70)
        assert container.current_load == 0.0
        assert recorder.event_count == 2

    def test_negative_load_raises(self, allocator, recorder):
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        with pytest.raises(InvalidLoadError):
            container.load(-5)
        assert recorder.event_count == 0

    def test_unload_empties(self, allocator, recorder):
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        container.load(100)
        container.unload()
        assert container.current_load == 0.0

    def test_notify_hazard_direct(self, allocator, recorder):
        container = LiquidContainer(200, True, allocator=allocator, hazard_sink=recorder)
        container.notify_hazard("Leak detected")
        assert [str(e) for e in recorder.events] == [f"[HAZARD] Leak detected - {container.serial_number}"]

    def test_default_sink_prints(self, allocator, capsys):
        """Test the default sink writes the hazard line to stdout."""
        container = LiquidContainer(200, True, allocator=allocator)
        container.load(150)
        captured = capsys.readouterr()
        assert captured.out == (
            "[HAZARD] Attempted overfill in hazardous conditions. - KON-L-1\n"
        )

    def test_custom_fill_ratios(self, allocator, recorder):
        container = LiquidContainer(
            100, False,
            allocator=allocator,
            hazard_sink=recorder,
            safe_fill_ratio=1.0,
        )
        container.load(100)
        assert container.current_load == 100.0
        assert recorder.event_count == 0

    @pytest.mark.parametrize("ratio", [0, -0.1, 1.5])
    def test_invalid_fill_ratio(self, allocator, ratio):
        with pytest.raises(InvalidParameterError):
            LiquidContainer(100, True, allocator=allocator, hazardous_fill_ratio=ratio)

    def test_non_numeric_fill_ratio(self, allocator):
        with pytest.raises(InvalidParameterError) as exc_info:
            LiquidContainer(100, True, allocator=allocator, safe_fill_ratio="most")
        assert exc_info.value.param == "safe_fill_ratio"
        assert allocator.next_sequence == 1

    def test_cargo_attributes(self, allocator, recorder):
        container = LiquidContainer(200, False, allocator=allocator, hazard_sink=recorder)
        assert container.cargo_attributes() == {"is_hazardous": False, "fill_limit": 180.0}


class TestGasContainer:
    """Tests for GasContainer residual unload."""

    def test_attributes(self, allocator):
        container = GasContainer(100, 5, allocator=allocator)
        assert container.kind == ContainerKind.GAS
        assert container.pressure == 5.0
        assert container.residual_ratio == 0.05
        assert container.serial_number == "KON-G-1"

    def test_load_then_unload_keeps_residual(self, allocator):
        """Test unloading 80 leaves 4."""
        container = GasContainer(100, 5, allocator=allocator)
        container.load(80)
        assert container.current_load == 80.0

        container.unload()
        assert container.current_load == 80 * 0.05
        assert container.current_load == pytest.approx(4.0)

    @pytest.mark.parametrize("load", [0, 1, 33.3, 99.99, 100])
    def test_unload_keeps_five_percent(self, allocator, load):
        container = GasContainer(100, 5, allocator=allocator)
        container.load(load)
        container.unload()
        assert container.current_load == load * 0.05

    def test_repeated_unload(self, allocator):
        container = GasContainer(100, 5, allocator=allocator)
        container.load(80)
        container.unload()
        container.unload()
        assert container.current_load == pytest.approx(0.2)

    def test_overfill_raises(self, allocator, recorder):
        """Test gas uses the generic check and never notifies on load."""
        container = GasContainer(100, 5, allocator=allocator, hazard_sink=recorder)
        container.load(90)
        with pytest.raises(OverfillError):
            container.load(20)
        assert container.current_load == 90.0
        assert recorder.event_count == 0

    def test_no_percentage_limit(self, allocator, recorder):
        container = GasContainer(100, 5, allocator=allocator, hazard_sink=recorder)
        container.load(100)
        assert container.current_load == 100.0
        assert recorder.event_count == 0

    def test_notify_hazard_explicit(self, allocator, recorder):
        container = GasContainer(100, 5, allocator=allocator, hazard_sink=recorder)
        container.notify_hazard("Pressure spike")
        assert recorder.for_source(container.serial_number)[0].message == "Pressure spike"

    def test_describe_after_unload(self, allocator):
        container = GasContainer(100, 5, allocator=allocator)
        container.load(80)
        container.unload()
        assert container.describe() == (
            "Container KON-G-1, Load: 4/100, BaseWeight: 10, TotalWeight: 14"
        )

    def test_cargo_attributes(self, allocator):
        assert GasContainer(100, 7.5, allocator=allocator).cargo_attributes() == {"pressure": 7.5}

    @pytest.mark.parametrize("pressure", ["high", None])
    def test_non_numeric_pressure(self, allocator, pressure):
        with pytest.raises(InvalidParameterError) as exc_info:
            GasContainer(100, pressure, allocator=allocator)
        assert exc_info.value.param == "pressure"
        assert allocator.next_sequence == 1


class TestRefrigeratedContainer:
    """Tests for RefrigeratedContainer."""

    def test_attributes(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        assert container.kind == ContainerKind.REFRIGERATED
        assert container.product_type == "Bananas"
        assert container.temperature == -5.0
        assert container.serial_number == "KON-C-1"

    def test_no_hazard_capability(self, allocator):
        container = RefrigeratedContainer(150, "Bananas", -5, allocator=allocator)
        assert not hasattr(container, "notify_hazard")

    def test_temperature_not_validated(self, allocator):
        """Test any temperature is stored as given."""
        container = RefrigeratedContainer(150, "Ice cream", 35, allocator=allocator)
        assert container.temperature == 35.0

    @pytest.mark.parametrize("temperature", ["cold", None, [4]])
    def test_non_numeric_temperature(self, allocator, temperature):
        """Test a temperature that is not a number is a parameter error."""
        with pytest.raises(InvalidParameterError) as exc_info:
            RefrigeratedContainer(150, "Bananas", temperature, allocator=allocator)
        assert exc_info.value.param == "temperature"
        assert allocator.next_sequence == 1
