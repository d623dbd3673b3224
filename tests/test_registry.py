"""Tests for the converter registry and conversion pipeline."""

from __future__ import annotations

import io
import threading
from dataclasses import dataclass

import pytest

from querymatch.conversion import (
    BUILTIN_CONVERTERS,
    ConverterRegistry,
    RawJSON,
    convert,
    default_registry,
    string_converter,
)
from querymatch.errors import (
    DecodeError,
    DocumentShapeError,
    TypeNotSupportedError,
    UnsupportedTypeError,
)
from querymatch.k8s import Unstructured, UnstructuredList


class Int64(int):
    pass


@dataclass
class Order:
    id: int
    status: str


def order_converter(value):
    if not isinstance(value, Order):
        raise TypeNotSupportedError()
    return {"id": value.id, "status": value.status}


class TestBuiltinPipeline:
    def test_builtin_order(self) -> None:
        assert default_registry.converters == BUILTIN_CONVERTERS

    def test_json_object_text(self, registry: ConverterRegistry) -> None:
        result = registry.convert('{"a":1}')
        assert result == {"a": 1}
        assert type(result["a"]) is int

    def test_json_array_text(self, registry: ConverterRegistry) -> None:
        assert registry.convert('["x","y"]') == ["x", "y"]

    def test_empty_bytes(self, registry: ConverterRegistry) -> None:
        with pytest.raises(DocumentShapeError, match="a valid JSON document is expected"):
            registry.convert(b"")

    def test_bare_number(self, registry: ConverterRegistry) -> None:
        with pytest.raises(DocumentShapeError, match="a JSON array or object is required"):
            registry.convert("42")

    def test_malformed_text_is_not_masked(self, registry: ConverterRegistry) -> None:
        with pytest.raises(DecodeError):
            registry.convert("{not json")

    def test_int64_in_mapping(self, registry: ConverterRegistry) -> None:
        result = registry.convert({"n": Int64(9223372036854775807)})
        assert result == {"n": 9223372036854775807}
        assert type(result["n"]) is int

    @pytest.mark.parametrize("value, expected", [
        ('{"k": "v"}', {"k": "v"}),
        (b'{"k": "v"}', {"k": "v"}),
        (RawJSON(b'{"k": "v"}'), {"k": "v"}),
        (io.BytesIO(b'{"k": "v"}'), {"k": "v"}),
        (io.BufferedReader(io.BytesIO(b'{"k": "v"}')), {"k": "v"}),
        (Unstructured({"k": "v"}), {"k": "v"}),
        (UnstructuredList(items=[Unstructured({"k": "v"})]), [{"k": "v"}]),
        ({"k": "v"}, {"k": "v"}),
        ([{"k": "v"}], [{"k": "v"}]),
        (({"k": "v"},), [{"k": "v"}]),
    ])
    def test_supported_inputs(self, registry: ConverterRegistry, value, expected) -> None:
        assert registry.convert(value) == expected

    def test_buffer_is_not_drained(self, registry: ConverterRegistry) -> None:
        buf = io.BytesIO(b'{"k": "v"}')
        registry.convert(buf)
        assert buf.read() == b'{"k": "v"}'

    def test_result_is_a_fresh_tree(self, registry: ConverterRegistry) -> None:
        data = {"a": [1]}
        result = registry.convert(data)
        result["a"].append(2)
        assert data == {"a": [1]}

    @pytest.mark.parametrize("value", [42, None, 1.5, object()])
    def test_unsupported(self, registry: ConverterRegistry, value) -> None:
        with pytest.raises(UnsupportedTypeError, match="unsupported type:") as exc_info:
            registry.convert(value)
        assert type(value).__name__ in str(exc_info.value)

    def test_unsupported_message_shows_value(self, registry: ConverterRegistry) -> None:
        with pytest.raises(UnsupportedTypeError) as exc_info:
            registry.convert(Order(7, "new"))
        message = str(exc_info.value)
        assert "<Order>" in message
        assert "status='new'" in message

    def test_repeated_conversion_is_stable(self, registry: ConverterRegistry) -> None:
        assert registry.convert('{"a": [1, 2]}') == registry.convert('{"a": [1, 2]}')


class TestRegistration:
    def test_custom_type(self, registry: ConverterRegistry) -> None:
        registry.register(order_converter)
        assert registry.convert(Order(1, "shipped")) == {"id": 1, "status": "shipped"}

    def test_registration_prepends(self, registry: ConverterRegistry) -> None:
        registry.register(order_converter)
        assert registry.converters[0] is order_converter
        assert registry.converters[1:] == BUILTIN_CONVERTERS
        assert len(registry) == len(BUILTIN_CONVERTERS) + 1

    def test_last_registered_wins(self, registry: ConverterRegistry) -> None:
        registry.register(lambda v: {"from": "first"})
        registry.register(lambda v: {"from": "second"})
        assert registry.convert("{}") == {"from": "second"}

    def test_override_builtin(self, registry: ConverterRegistry) -> None:
        def dict_wrapper(value):
            if not isinstance(value, dict):
                raise TypeNotSupportedError()
            return {"wrapped": value}

        registry.register(dict_wrapper)
        assert registry.convert({"a": 1}) == {"wrapped": {"a": 1}}
        # Other types still reach the built-ins
        assert registry.convert("[1]") == [1]

    def test_sentinel_is_skipped(self, registry: ConverterRegistry) -> None:
        calls = []

        def never(value):
            calls.append(value)
            raise TypeNotSupportedError()

        registry.register(never)
        assert registry.convert('{"a": 1}') == {"a": 1}
        assert calls == ['{"a": 1}']

    def test_sentinel_subclass_is_skipped(self, registry: ConverterRegistry) -> None:
        class NotMine(TypeNotSupportedError):
            pass

        def never(value):
            raise NotMine("not an order")

        registry.register(never)
        assert registry.convert("[]") == []

    def test_domain_error_short_circuits(self, registry: ConverterRegistry) -> None:
        def strict(value):
            raise ValueError("order is corrupt")

        registry.register(strict)
        with pytest.raises(ValueError, match="order is corrupt"):
            registry.convert('{"a": 1}')

    def test_custom_result_is_normalized(self, registry: ConverterRegistry) -> None:
        registry.register(lambda v: {"count": Int64(3)})
        result = registry.convert("{}")
        assert type(result["count"]) is int

    def test_same_converter_twice(self, registry: ConverterRegistry) -> None:
        registry.register(order_converter)
        registry.register(order_converter)
        assert registry.convert(Order(2, "new")) == {"id": 2, "status": "new"}

    def test_registry_without_converters(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            ConverterRegistry().convert("{}")

    def test_module_level_register(self) -> None:
        class Ticket:
            pass

        def ticket_converter(value):
            if not isinstance(value, Ticket):
                raise TypeNotSupportedError()
            return {"ticket": True}

        from querymatch.conversion import register_converter

        register_converter(ticket_converter)
        assert convert(Ticket()) == {"ticket": True}
        assert default_registry.converters[0] is ticket_converter

    def test_module_level_registrations_do_not_leak(self) -> None:
        # Runs after test_module_level_register; the autouse fixture restored the registry
        assert default_registry.converters == BUILTIN_CONVERTERS


class TestConcurrency:
    def test_concurrent_convert_and_register(self, registry: ConverterRegistry) -> None:
        errors: list[BaseException] = []
        start = threading.Barrier(9)

        def reader() -> None:
            start.wait()
            try:
                for _ in range(200):
                    assert registry.convert('{"a": 1}') == {"a": 1}
            except BaseException as e:
                errors.append(e)

        def writer() -> None:
            start.wait()
            for _ in range(50):
                registry.register(order_converter)

        threads = [threading.Thread(target=reader) for _ in range(8)]
        threads.append(threading.Thread(target=writer))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(registry) == len(BUILTIN_CONVERTERS) + 50

    def test_snapshot_taken_at_start(self, registry: ConverterRegistry) -> None:
        seen = []

        def registering(value):
            # Registration during a conversion does not affect the running one
            if not seen:
                seen.append(value)
                registry.register(lambda v: {"late": True})
            raise TypeNotSupportedError()

        registry.register(registering)
        assert registry.convert("[]") == []
        assert registry.convert("[]") == {"late": True}


def test_string_converter_is_builtin() -> None:
    assert string_converter in BUILTIN_CONVERTERS
    assert BUILTIN_CONVERTERS[0] is string_converter
