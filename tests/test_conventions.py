"""
Unit tests for naming conventions

Tests:
- Word splitting
- Casing family matching, scoring and denormalization
- Prefix, abbreviation and Hungarian notation scoring
- ConventionRegistry ordering and replacement
"""

import pytest

from objmap.conventions import (
    AbbreviationConvention,
    CamelCaseConvention,
    ConventionRegistry,
    HungarianNotationConvention,
    KebabCaseConvention,
    PascalCaseConvention,
    PrefixConvention,
    SnakeCaseConvention,
    split_words,
)


# ============================================================================
# TEST: split_words
# ============================================================================


class TestSplitWords:
    """Tests for split_words"""

    @pytest.mark.parametrize("name,expected", [
        ("firstName", ["first", "name"]),
        ("FirstName", ["first", "name"]),
        ("first_name", ["first", "name"]),
        ("first-name", ["first", "name"]),
        ("HTTPServer", ["http", "server"]),
        ("getURLPath", ["get", "url", "path"]),
        ("user_ID", ["user", "id"]),
        ("address2Line", ["address2", "line"]),
        ("name", ["name"]),
        ("", []),
    ])
    def test_split(self, name, expected):
        """Test separators, casing boundaries and acronyms"""
        assert split_words(name) == expected


# ============================================================================
# TEST: Casing conventions
# ============================================================================


class TestCasingConventions:
    """Tests for camel, Pascal, snake and kebab conventions"""

    @pytest.mark.parametrize("convention,name,expected", [
        (CamelCaseConvention(), "firstName", True),
        (CamelCaseConvention(), "FirstName", False),
        (CamelCaseConvention(), "name", False),
        (PascalCaseConvention(), "FirstName", True),
        (PascalCaseConvention(), "firstName", False),
        (SnakeCaseConvention(), "first_name", True),
        (SnakeCaseConvention(), "first-name", False),
        (KebabCaseConvention(), "first-name", True),
        (KebabCaseConvention(), "first_name", False),
    ])
    def test_matches(self, convention, name, expected):
        """Test style recognition"""
        assert convention.matches(name) is expected

    @pytest.mark.parametrize("convention,expected", [
        (CamelCaseConvention(), "firstName"),
        (PascalCaseConvention(), "FirstName"),
        (SnakeCaseConvention(), "first_name"),
        (KebabCaseConvention(), "first-name"),
    ])
    def test_denormalize(self, convention, expected):
        """Test words are rendered in each style"""
        assert convention.denormalize("first name") == expected

    def test_normalize(self):
        """Test normalization to space-separated lowercase words"""
        assert SnakeCaseConvention().normalize("firstName") == "first name"

    def test_identical_names_score_one(self):
        """Test identical names are a certain match"""
        assert CamelCaseConvention().calculate_match_confidence("email", "email") == 1.0

    def test_same_convention_same_words(self):
        """Test two names of the convention with equal words score 1.0"""
        assert CamelCaseConvention().calculate_match_confidence("userID", "userId") == 1.0

    def test_cross_convention_score(self):
        """Test equal words in different styles score 0.85"""
        convention = CamelCaseConvention()
        assert convention.calculate_match_confidence("first_name", "firstName") == 0.85
        assert convention.calculate_match_confidence("FirstName", "firstName") == 0.85

    def test_different_words_score_zero(self):
        """Test unrelated names do not match"""
        assert CamelCaseConvention().calculate_match_confidence("firstName", "lastName") == 0.0


# ============================================================================
# TEST: Prefix convention
# ============================================================================


class TestPrefixConvention:
    """Tests for PrefixConvention"""

    @pytest.fixture
    def convention(self):
        return PrefixConvention()

    def test_split_prefix(self, convention):
        """Test prefix detection"""
        assert convention.split_prefix("getUserId") == ("get", ["user", "id"])
        assert convention.split_prefix("is_active") == ("is", ["active"])
        assert convention.split_prefix("get") is None
        assert convention.split_prefix("getter") is None

    def test_one_side_prefixed(self, convention):
        """Test prefixed name against its remainder scores 0.9"""
        assert convention.calculate_match_confidence("getName", "name") == 0.9
        assert convention.calculate_match_confidence("user_id", "getUserId") == 0.9

    def test_both_prefixed(self, convention):
        """Test equal remainders with different prefixes score 1.0"""
        assert convention.calculate_match_confidence("isActive", "getActive") == 1.0
        assert convention.calculate_match_confidence("getActive", "getName") == 0.0

    def test_unprefixed_pair_left_to_others(self, convention):
        """Test names without prefixes score 0.0"""
        assert convention.calculate_match_confidence("name", "name") == 0.0

    def test_normalize_strips_prefix(self, convention):
        """Test normalize drops the prefix"""
        assert convention.normalize("getUserName") == "user name"
        assert convention.denormalize("user name") == "getUserName"


# ============================================================================
# TEST: Abbreviation convention
# ============================================================================


class TestAbbreviationConvention:
    """Tests for AbbreviationConvention"""

    @pytest.fixture
    def convention(self):
        return AbbreviationConvention()

    def test_expand(self, convention):
        """Test abbreviations expand to their words"""
        assert convention.expand("dob") == ["date", "of", "birth"]
        assert convention.expand("userAddr") == ["user", "address"]

    @pytest.mark.parametrize("name,expected", [
        ("dob", True),
        ("ID", True),
        ("user_id", True),
        ("id_card", True),
        ("order_qty_total", True),
        ("userId", False),
        ("qtyOrdered", False),
        ("identity", False),
        ("first_name", False),
    ])
    def test_matches(self, convention, name, expected):
        """Test only bare or underscore-delimited abbreviations are recognized"""
        assert convention.matches(name) is expected

    def test_camel_abbreviations_still_score(self, convention):
        """Test scoring expands abbreviations inside camelCase names"""
        assert not convention.matches("userId")
        assert convention.calculate_match_confidence("userId", "user_identifier") == 0.8

    def test_equal_expansion(self, convention):
        """Test equal expanded words score 0.8"""
        assert convention.calculate_match_confidence("dob", "date_of_birth") == 0.8
        assert convention.calculate_match_confidence("qty", "quantity") == 0.8

    def test_partial_overlap_is_capped(self, convention):
        """Test partial overlap stays below 0.8"""
        score = convention.calculate_match_confidence("id", "userId")
        assert score == pytest.approx(2 / 3)

        capped = convention.calculate_match_confidence("getUserId", "user_id")
        assert capped == 0.79

    def test_requires_an_abbreviation(self, convention):
        """Test pairs without abbreviations are not scored"""
        assert convention.calculate_match_confidence("first_name", "firstName") == 0.0

    def test_extra_abbreviations(self):
        """Test custom abbreviations extend the defaults"""
        convention = AbbreviationConvention(extra_abbreviations={"Cust": "customer"})
        assert convention.calculate_match_confidence("custName", "customer_name") == 0.8
        assert convention.calculate_match_confidence("qty", "quantity") == 0.8

    def test_denormalize(self, convention):
        """Test expansions are abbreviated back"""
        assert convention.denormalize("quantity") == "qty"


# ============================================================================
# TEST: Hungarian notation
# ============================================================================


class TestHungarianNotationConvention:
    """Tests for HungarianNotationConvention"""

    @pytest.fixture
    def convention(self):
        return HungarianNotationConvention()

    def test_matches(self, convention):
        """Test type-tag detection"""
        assert convention.matches("strName")
        assert convention.matches("bActive")
        assert not convention.matches("string")
        assert not convention.matches("name")

    def test_confidence(self, convention):
        """Test untagged words matching the other name score 0.85"""
        assert convention.calculate_match_confidence("strName", "name") == 0.85
        assert convention.calculate_match_confidence("is_active", "bActive") == 0.0
        assert convention.calculate_match_confidence("first_name", "firstName") == 0.0


# ============================================================================
# TEST: ConventionRegistry
# ============================================================================


class TestConventionRegistry:
    """Tests for ConventionRegistry"""

    def test_default_order(self):
        """Test most specific conventions come first"""
        assert ConventionRegistry().names() == ["prefix", "abbreviation", "camel", "pascal", "snake", "kebab"]

    def test_empty_registry(self):
        """Test include_defaults=False"""
        assert len(ConventionRegistry(include_defaults=False)) == 0

    def test_register_appends_new_names(self):
        """Test unknown names are appended"""
        registry = ConventionRegistry().register(HungarianNotationConvention())
        assert registry.names()[-1] == "hungarian"

    def test_register_replaces_in_place(self):
        """Test re-registering a name keeps its position"""
        replacement = AbbreviationConvention(extra_abbreviations={"cust": "customer"})
        registry = ConventionRegistry().register(replacement)

        assert registry.names()[1] == "abbreviation"
        assert registry.get("abbreviation") is replacement

    def test_nameless_convention_rejected(self):
        """Test conventions must be named"""
        class Nameless(CamelCaseConvention):
            name = ""

        with pytest.raises(ValueError):
            ConventionRegistry().register(Nameless())
