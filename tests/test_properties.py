"""Tests for prime set property reports."""

import json

import pytest

from primecraft.generation.properties import (
    PrimeProperties,
    analyze_distribution,
    calculate_prime_properties,
    consecutive_gaps,
    relationship_tags,
    strength_label,
)


class TestStrengthLabel:
    """Tests for strength_label function."""

    @pytest.mark.parametrize("bits,label", [
        (16, "weak"),
        (1023, "weak"),
        (1024, "legacy"),
        (2047, "legacy"),
        (2048, "standard"),
        (3071, "standard"),
        (3072, "strong"),
        (4095, "strong"),
        (4096, "ultra-strong"),
        (40960, "ultra-strong"),
    ])
    def test_boundaries(self, bits, label):
        assert strength_label(bits) == label


class TestRelationshipTags:
    def test_rsa_multi(self):
        assert relationship_tags("rsa-multi", 1) == ["rsa-suitable"]
        assert relationship_tags("rsa-multi", 2) == ["rsa-suitable"]
        assert relationship_tags("rsa-multi", 3) == ["rsa-suitable", "multi-prime"]

    def test_strong(self):
        assert set(relationship_tags("strong", 1)) == {"strong-prime", "safe-prime"}

    def test_unknown(self):
        assert relationship_tags("other", 2) == []


class TestGaps:
    def test_in_given_order(self):
        assert consecutive_gaps([3, 7, 5]) == [4, 2]

    def test_single(self):
        assert consecutive_gaps([7]) == []


class TestAnalyzeDistribution:
    """Tests for analyze_distribution function."""

    def test_too_few_primes(self):
        assert analyze_distribution([3, 5]) == {"uniformity": 1.0, "clustering": False}

    def test_even_spacing(self):
        result = analyze_distribution([7, 3, 5])
        assert result["uniformity"] == pytest.approx(1.0)
        assert result["clustering"] is False

    def test_clustered(self):
        result = analyze_distribution([101, 103, 107, 109, 1009])
        assert result["clustering"] is True
        assert 0.0 < result["uniformity"] < 1.0

    def test_repeated_values(self):
        assert analyze_distribution([5, 5, 5]) == {"uniformity": 0.0, "clustering": False}

    def test_large_integers(self):
        base = 1 << 2047
        result = analyze_distribution([base + 1, base + (1 << 1900), base + (2 << 1900)])
        assert result["uniformity"] == pytest.approx(1.0)


class TestCalculateProperties:
    """Tests for calculate_prime_properties function."""

    def test_small_set(self):
        props = calculate_prime_properties([3, 7, 5], "rsa-multi")
        assert isinstance(props, PrimeProperties)
        assert props.gaps == (4, 2)
        assert props.product == 105
        assert props.bit_lengths == (2, 3, 3)
        assert props.total_bits == 8
        assert props.strength == "weak"
        assert props.relationships == ("rsa-suitable", "multi-prime")
        assert set(props.distribution) == {"uniformity", "clustering"}

    def test_single_prime(self):
        p = 2**127 - 1
        props = calculate_prime_properties([p], "strong")
        assert props.gaps == ()
        assert props.product == p
        assert props.strength == "weak"

    def test_total_bits_drive_strength(self):
        p = 2**521 - 1
        props = calculate_prime_properties([p] * 4, "rsa-multi")
        assert props.total_bits == 2084
        assert props.strength == "standard"

    def test_to_dict_uses_decimal_strings(self):
        props = calculate_prime_properties([3, 7, 5], "rsa-multi")
        d = props.to_dict()
        assert d["gaps"] == ["4", "2"]
        assert d["product"] == "105"
        assert d["bit_lengths"] == [2, 3, 3]
        assert d["relationships"] == ["rsa-suitable", "multi-prime"]
        json.dumps(d)

    def test_to_dict_huge_product(self):
        props = calculate_prime_properties([10**1300] * 10, "rsa-multi")
        assert props.to_dict()["product"] == "1" + "0" * 13000
