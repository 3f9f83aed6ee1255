"""
Unit tests for PropertyMapping

Tests:
- Transform pipeline: ignore, condition, transformer, default
- Transformer shapes: one/two argument callables, transform() objects, names
- Fluent configuration and serialization
"""

import pytest

from objmap import PropertyMapping, Transformer


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def source_data():
    """Normalized source view"""
    return {"name": "Ada", "active": True, "score": 0}


class SuffixTransformer(Transformer):
    """Object-form transformer reading the source data"""

    def transform(self, value, source_data):
        return f"{value}-{source_data['name']}"


class Doubler:
    """Callable object"""

    def __call__(self, value):
        return value * 2


# ============================================================================
# TEST: Pipeline
# ============================================================================


class TestTransformPipeline:
    """Tests for PropertyMapping.transform"""

    def test_passthrough_without_configuration(self, source_data):
        """Test raw value is returned unchanged"""
        assert PropertyMapping().transform("x", source_data) == "x"

    def test_ignored_returns_none(self, source_data):
        """Test ignore() yields None"""
        mapping = PropertyMapping().map_from("name").ignore()
        assert mapping.transform("Ada", source_data) is None

    def test_ignore_after_using_wins(self, source_data):
        """Test ignore() called after using() still yields None"""
        mapping = PropertyMapping().using(str.upper).ignore()
        assert mapping.transform("ada", source_data) is None

    def test_ignore_before_using_wins(self, source_data):
        """Test ignore() called before using() still yields None"""
        mapping = PropertyMapping().ignore().using(str.upper).default_value("x")
        assert mapping.transform("ada", source_data) is None

    def test_condition_false_skips_transformer(self, source_data):
        """Test a false condition bypasses the transformer"""
        calls = []
        mapping = PropertyMapping().using(lambda v: calls.append(v) or v).only_if(lambda src: False)

        assert mapping.transform("Ada", source_data) is None
        assert calls == []

    def test_condition_false_applies_default(self, source_data):
        """Test a false condition still lets the default apply"""
        mapping = PropertyMapping().only_if(lambda src: not src["active"]).default_value("fallback")
        assert mapping.transform("Ada", source_data) == "fallback"

    def test_condition_true_transforms(self, source_data):
        """Test a true condition runs the transformer"""
        mapping = PropertyMapping().using(str.upper).only_if(lambda src: src["active"])
        assert mapping.transform("ada", source_data) == "ADA"

    def test_default_applies_to_none(self, source_data):
        """Test default replaces None"""
        mapping = PropertyMapping().default_value("n/a")
        assert mapping.transform(None, source_data) == "n/a"

    @pytest.mark.parametrize("falsy", [0, "", False, []])
    def test_default_preserves_falsy_values(self, source_data, falsy):
        """Test default is not applied to falsy non-None values"""
        mapping = PropertyMapping().default_value("n/a")
        assert mapping.transform(falsy, source_data) == falsy

    def test_default_none_is_distinct_from_no_default(self):
        """Test default_value(None) sets has_default"""
        mapping = PropertyMapping().default_value(None)
        assert mapping.has_default is True
        assert PropertyMapping().has_default is False

    def test_default_applies_after_transformer_returns_none(self, source_data):
        """Test default applies to a transformer's None result"""
        mapping = PropertyMapping().using(lambda v: None).default_value(42)
        assert mapping.transform("x", source_data) == 42

    def test_transformer_exception_propagates(self, source_data):
        """Test transformer errors are not swallowed"""
        def explode(value):
            raise ValueError("boom")

        mapping = PropertyMapping().using(explode).default_value("never")
        with pytest.raises(ValueError, match="boom"):
            mapping.transform("x", source_data)

    def test_condition_exception_propagates(self, source_data):
        """Test condition errors are not swallowed"""
        mapping = PropertyMapping().only_if(lambda src: src["missing"])
        with pytest.raises(KeyError):
            mapping.transform("x", source_data)


# ============================================================================
# TEST: Transformer shapes
# ============================================================================


class TestTransformerShapes:
    """Tests for the accepted transformer shapes"""

    def test_single_argument_function(self, source_data):
        """Test plain one-argument function"""
        assert PropertyMapping().using(str.strip).transform("  a ", source_data) == "a"

    def test_two_argument_callable_receives_source(self, source_data):
        """Test (value, source_data) callable"""
        mapping = PropertyMapping().using(lambda value, src: f"{value}:{src['name']}")
        assert mapping.transform("id", source_data) == "id:Ada"

    def test_transform_object(self, source_data):
        """Test object exposing transform()"""
        mapping = PropertyMapping().using(SuffixTransformer())
        assert mapping.transform("x", source_data) == "x-Ada"

    def test_callable_object(self, source_data):
        """Test object implementing __call__"""
        assert PropertyMapping().using(Doubler()).transform(4, source_data) == 8

    def test_static_method(self, source_data):
        """Test static method reference"""
        class Helpers:
            @staticmethod
            def shout(value):
                return f"{value}!"

        assert PropertyMapping().using(Helpers.shout).transform("hi", source_data) == "hi!"

    def test_registered_name(self, source_data):
        """Test transformer resolved from the registry by name"""
        mapping = PropertyMapping().using("uppercase")
        assert mapping.transformer_name == "UPPERCASE"
        assert mapping.transform("ada", source_data) == "ADA"


# ============================================================================
# TEST: Configuration
# ============================================================================


class TestConfiguration:
    """Tests for fluent configuration"""

    def test_mutators_return_same_instance(self):
        """Test chaining returns self"""
        mapping = PropertyMapping()
        assert mapping.map_from("a") is mapping
        assert mapping.using(str) is mapping
        assert mapping.only_if(bool) is mapping
        assert mapping.default_value(1) is mapping
        assert mapping.ignore() is mapping

    def test_map_from_last_write_wins(self):
        """Test calling map_from twice keeps the last value"""
        mapping = PropertyMapping().map_from("a").map_from("b")
        assert mapping.source_property == "b"

    def test_is_mapped(self):
        """Test is_mapped reflects source or transformer"""
        assert not PropertyMapping().is_mapped
        assert PropertyMapping().map_from("x").is_mapped
        assert PropertyMapping().using(str).is_mapped

    def test_serializable_round_trip(self):
        """Test JSON-safe mappings survive to_dict/from_dict"""
        mapping = PropertyMapping().map_from("a.b").using("TRIM").default_value(0)
        assert mapping.is_serializable()

        restored = PropertyMapping.from_dict(mapping.to_dict())
        assert restored.source_property == "a.b"
        assert restored.transformer_name == "TRIM"
        assert restored.has_default and restored.default == 0

    def test_callables_are_not_serializable(self):
        """Test lambdas and conditions prevent serialization"""
        assert not PropertyMapping().using(lambda v: v).is_serializable()
        assert not PropertyMapping().only_if(lambda s: True).is_serializable()
        assert not PropertyMapping().default_value(object()).is_serializable()
