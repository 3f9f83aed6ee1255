"""
Unit tests for ConventionMapper

Tests:
- Confidence calculation across the registered conventions
- Convention detection for names and types
- Discovery, thresholds, ties and memoization
- apply_conventions onto a TypeMapping
"""

import pytest

from objmap import ConventionMapper, MappingStorage, TypeMapping
from objmap.conventions import ConventionRegistry, HungarianNotationConvention, NamingConvention
from sample_models import PersonA, PersonB, ProductRecord, ProductView, UserDTO, UserEntity


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mapper():
    """ConventionMapper with default conventions and threshold"""
    return ConventionMapper()


class SuffixConvention(NamingConvention):
    """Matches a name with the same name plus a suffix word"""

    name = "suffix"

    def matches(self, name):
        return False

    def denormalize(self, normalized):
        return normalized

    def calculate_match_confidence(self, source_name, destination_name):
        source_words = self.normalize(source_name).split()
        destination_words = self.normalize(destination_name).split()
        if source_words[:len(destination_words)] == destination_words and len(source_words) == len(destination_words) + 1:
            return 0.95
        return 0.0


# ============================================================================
# TEST: Confidence
# ============================================================================


class TestConfidence:
    """Tests for calculate_confidence and score"""

    @pytest.mark.parametrize("source,destination,expected", [
        ("userId", "userId", 1.0),
        ("first_name", "firstName", 0.85),
        ("user_id", "userId", 0.85),
        ("getName", "name", 0.9),
        ("isActive", "getActive", 1.0),
        ("dob", "date_of_birth", 0.8),
        ("qty", "quantity", 0.8),
    ])
    def test_known_pairs(self, mapper, source, destination, expected):
        """Test confidence for representative name pairs"""
        assert mapper.calculate_confidence(source, destination) == pytest.approx(expected)

    def test_unrelated_names_score_low(self, mapper):
        """Test unrelated names stay far below any sensible threshold"""
        assert mapper.calculate_confidence("firstName", "lastName") < 0.3

    def test_score_names_convention(self, mapper):
        """Test score() reports the winning convention"""
        assert mapper.score("getName", "name") == (0.9, "prefix")
        assert mapper.score("dob", "date_of_birth") == (0.8, "abbreviation")
        assert mapper.score("a", "b") == (0.0, None)

    def test_confidence_in_range(self, mapper):
        """Test every score lies in [0, 1]"""
        for source in ("x", "getX", "x_id", "XId"):
            for destination in ("x", "getX", "x_id", "XId"):
                assert 0.0 <= mapper.calculate_confidence(source, destination) <= 1.0


# ============================================================================
# TEST: Detection
# ============================================================================


class TestDetectConvention:
    """Tests for detect_convention"""

    @pytest.mark.parametrize("name,expected", [
        ("firstName", "camel"),
        ("FirstName", "pascal"),
        ("first_name", "snake"),
        ("first-name", "kebab"),
        ("getName", "prefix"),
        ("dob", "abbreviation"),
        ("user_id", "abbreviation"),
        ("userId", "camel"),
        ("orderQty", "camel"),
    ])
    def test_detect_name(self, mapper, name, expected):
        """Test detection for single names"""
        assert mapper.detect_convention(name).name == expected

    def test_no_match(self, mapper):
        """Test None when nothing matches"""
        assert mapper.detect_convention("_private") is None

    def test_detect_type(self, mapper):
        """Test detection by majority of a type's property names"""
        assert mapper.detect_convention(UserEntity).name == "snake"
        assert mapper.detect_convention(UserDTO).name == "camel"

    def test_detect_type_by_dotted_name(self, mapper):
        """Test dotted type names are introspected"""
        assert mapper.detect_convention("sample_models.UserEntity").name == "snake"


# ============================================================================
# TEST: Discovery
# ============================================================================


class TestDiscoverMappings:
    """Tests for discover_mappings, explain and match_names"""

    def test_discover_casing(self, mapper):
        """Test snake_case entity to camelCase DTO"""
        assert mapper.discover_mappings(UserEntity, UserDTO) == {
            "userId": "user_id",
            "firstName": "first_name",
            "lastName": "last_name",
        }

    def test_discover_prefix_and_abbreviation(self, mapper):
        """Test accessor prefixes and abbreviations"""
        assert mapper.discover_mappings(ProductRecord, ProductView) == {
            "name": "getName",
            "date_of_birth": "dob",
            "quantity": "qty",
        }

    def test_identical_names_are_discovered(self, mapper):
        """Test equal names match with certainty"""
        assert mapper.discover_mappings(PersonA, PersonB) == {"age": "age"}

    def test_threshold_is_inclusive(self, mapper):
        """Test confidence equal to the threshold is accepted"""
        mapper.set_confidence_threshold(0.85)
        assert "firstName" in mapper.discover_mappings(UserEntity, UserDTO)

    def test_higher_threshold_gives_subset(self, mapper):
        """Test raising the threshold never adds pairs"""
        low = mapper.discover_mappings(PersonA, PersonB)
        mapper.set_confidence_threshold(0.6)
        lower = mapper.discover_mappings(PersonA, PersonB)
        mapper.set_confidence_threshold(0.95)
        high = mapper.discover_mappings(UserEntity, UserDTO)

        assert lower == {"id": "userId", "age": "age"}
        assert set(low.items()) <= set(lower.items())
        assert high == {}

    def test_generic_maps_discover_nothing(self, mapper):
        """Test discovery needs reflectable types"""
        assert mapper.discover_mappings("array", UserDTO) == {}
        assert mapper.discover_mappings(UserEntity, dict) == {}

    def test_tie_goes_to_first_source(self, mapper):
        """Test the first declared source wins equal scores"""
        matches = mapper.match_names(["first_name", "firstName"], ["FirstName"])
        assert matches[0].source_property == "first_name"
        assert matches[0].confidence == 0.85

    def test_explain_includes_rejected(self, mapper):
        """Test explain() reports every destination property"""
        matches = {match.destination_property: match for match in mapper.explain(PersonA, PersonB)}

        assert set(matches) == {"id", "name", "age"}
        assert matches["id"].source_property == "userId"
        assert matches["id"].accepted is False
        assert matches["name"].source_property is None
        assert matches["age"].to_dict()["accepted"] is True

    def test_results_are_memoized(self, mapper, monkeypatch):
        """Test a second discovery does not rescore"""
        mapper.discover_mappings(UserEntity, UserDTO)

        def fail(*args, **kwargs):
            raise AssertionError("explain() called again")

        monkeypatch.setattr(mapper, "explain", fail)
        assert mapper.discover_mappings(UserEntity, UserDTO)["userId"] == "user_id"

    def test_returned_dict_is_a_copy(self, mapper):
        """Test callers cannot mutate the memoized result"""
        mapper.discover_mappings(UserEntity, UserDTO).clear()
        assert mapper.discover_mappings(UserEntity, UserDTO)

    def test_discover_for_names(self, mapper):
        """Test discovery between plain name lists"""
        assert mapper.discover_for_names(["user_id", "first_name"], ["userId", "firstName", "email"]) == {
            "userId": "user_id",
            "firstName": "first_name",
        }


# ============================================================================
# TEST: Configuration
# ============================================================================


class TestConfiguration:
    """Tests for thresholds and registered conventions"""

    @pytest.mark.parametrize("value,expected", [(1.5, 1.0), (-0.2, 0.0), (0.7, 0.7)])
    def test_threshold_is_clamped(self, mapper, value, expected):
        """Test out-of-range thresholds are clamped"""
        assert mapper.set_confidence_threshold(value).threshold == expected

    def test_constructor_clamps(self):
        """Test constructor threshold is clamped"""
        assert ConventionMapper(threshold=3).threshold == 1.0

    def test_threshold_change_clears_memo(self, mapper):
        """Test new threshold takes effect for memoized pairs"""
        assert mapper.discover_mappings(UserEntity, UserDTO)
        mapper.set_confidence_threshold(0.9)
        assert mapper.discover_mappings(UserEntity, UserDTO) == {}

    def test_register_custom_convention(self, mapper):
        """Test a registered convention contributes to discovery"""
        assert "email" not in mapper.discover_mappings(UserEntity, UserDTO)

        mapper.register_convention(SuffixConvention())

        assert mapper.discover_mappings(UserEntity, UserDTO)["email"] == "email_address"
        assert mapper.get_conventions()[-1].name == "suffix"

    def test_hungarian_is_opt_in(self, mapper):
        """Test Hungarian notation only scores once registered"""
        assert mapper.calculate_confidence("strName", "name") == 0.0
        mapper.register_convention(HungarianNotationConvention())
        assert mapper.calculate_confidence("strName", "name") == 0.85

    def test_empty_registry(self):
        """Test a mapper without conventions discovers nothing"""
        mapper = ConventionMapper(registry=ConventionRegistry(include_defaults=False))
        assert mapper.discover_mappings(UserEntity, UserDTO) == {}


# ============================================================================
# TEST: apply_conventions
# ============================================================================


class TestApplyConventions:
    """Tests for apply_conventions"""

    def test_registers_discovered_pairs(self, mapper):
        """Test discovered pairs become explicit mappings"""
        type_mapping = TypeMapping(MappingStorage(), UserEntity, UserDTO)
        mapper.apply_conventions(UserEntity, UserDTO, type_mapping)

        assert type_mapping.get_mapping("userId").source_property == "user_id"
        assert type_mapping.get_mapping("lastName").source_property == "last_name"

    def test_explicit_mappings_are_kept(self, mapper):
        """Test existing configuration is not overwritten"""
        type_mapping = TypeMapping(MappingStorage(), UserEntity, UserDTO)
        type_mapping.for_member("firstName", lambda m: m.map_from("last_name"))

        mapper.apply_conventions(UserEntity, UserDTO, type_mapping)

        assert type_mapping.get_mapping("firstName").source_property == "last_name"

    def test_identical_names_are_skipped(self, mapper):
        """Test same-name pairs need no registration"""
        type_mapping = TypeMapping(MappingStorage(), PersonA, PersonB)
        mapper.apply_conventions(PersonA, PersonB, type_mapping)

        assert type_mapping.get_mappings() == {}
