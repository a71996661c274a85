import logging
import random

import pytest

from tag_stats.application.usecase.aggregation_store import fold_partitions
from tag_stats.infrastructure.store.tag_stat_factory import build_aggregation_store

from conftest import make_record


def snapshot(store):
    """모든 범위/지표의 (tag, value) 집합을 비교 가능한 형태로 모은다."""
    result = {
        "global_views": sorted(store.global_views.get_all()),
        "global_interaction": sorted(store.global_interaction.get_all()),
    }
    for country in store.countries:
        result[f"{country}_views"] = sorted(store.country_views_for(country).get_all())
        result[f"{country}_interaction"] = sorted(store.country_interaction_for(country).get_all())
    return result


def test_single_record_round_trip(store):
    store.update(make_record("a|b", "US", views=100, likes=50, dislikes=10, comment_count=5))

    for tag in ("a", "b"):
        assert store.country_views_for("US").get(tag) == 100
        assert store.country_interaction_for("US").get(tag) == pytest.approx(62.5)
        assert store.global_views.get(tag) == 100
        assert store.global_interaction.get(tag) == pytest.approx(62.5)
    assert store.countries == ["US"]
    assert store.record_count == 1


def test_views_stay_integers_and_interaction_floats(store):
    store.update(make_record("a", views=3, likes=1, dislikes=1, comment_count=1))
    assert isinstance(store.global_views.get("a"), int)
    assert isinstance(store.global_interaction.get("a"), float)


def test_case_variants_accumulate_independently(store):
    store.update(make_record("funny|Funny|FUNNY", views=10))
    store.update(make_record("funny", views=5))

    views = dict(store.country_views_for("US").get_all())
    assert views == {"funny": 15, "Funny": 10, "FUNNY": 10}


def test_non_ascii_tags_never_aggregated(store):
    store.update(make_record("café|cafe", views=10))
    for stat in (
        store.global_views,
        store.global_interaction,
        store.country_views_for("US"),
        store.country_interaction_for("US"),
    ):
        assert "café" not in stat
        assert [tag for tag, _ in stat.get_all()] == ["cafe"]


def test_countries_are_partitioned(store, sample_records):
    store.update_all(sample_records)

    assert store.countries == ["CA", "GB", "US"]
    assert store.country_views_for("US").get("cats") == 1400
    assert store.country_views_for("GB").get("cats") == 0
    assert store.country_views_for("GB").get("news") == 50
    assert store.global_views.get("news") == 450
    assert store.global_views.get("funny") == 1075


def test_zero_view_record_is_skipped_with_warning(store, caplog):
    with caplog.at_level(logging.WARNING):
        applied = store.update(make_record("a|b", "FR", views=0, video_id="zero"))

    assert applied is False
    assert store.skipped_records == 1
    assert store.record_count == 0
    assert len(store.global_views) == 0
    assert store.countries == ["FR"]
    assert len(store.country_views_for("FR")) == 0
    assert "zero-view record" in caplog.text
    assert "zero" in caplog.text


def test_unknown_country_has_empty_stats(store):
    assert len(store.country_views_for("ZZ")) == 0
    assert not store.has_country("ZZ")


def test_mapping_and_tree_backends_agree(sample_records):
    mapping = build_aggregation_store("mapping").update_all(sample_records)
    tree = build_aggregation_store("tree").update_all(sample_records)

    assert snapshot(mapping) == snapshot(tree)


def test_totals_do_not_depend_on_record_order(store, sample_records):
    shuffled = list(sample_records)
    random.Random(7).shuffle(shuffled)
    reference = snapshot(build_aggregation_store(store.backend).update_all(sample_records))
    permuted = snapshot(store.update_all(shuffled))

    assert permuted.keys() == reference.keys()
    for key, entries in reference.items():
        assert [t for t, _ in permuted[key]] == [t for t, _ in entries]
        assert [v for _, v in permuted[key]] == pytest.approx([v for _, v in entries])


def test_fold_partitions_matches_sequential_fold(store, sample_records):
    sequential = snapshot(store.update_all(sample_records))
    merged = fold_partitions(
        [sample_records[:2], sample_records[2:3], sample_records[3:]],
        lambda: build_aggregation_store(store.backend),
    )

    folded = snapshot(merged)
    assert folded.keys() == sequential.keys()
    for key, entries in sequential.items():
        assert [t for t, _ in folded[key]] == [t for t, _ in entries]
        assert [v for _, v in folded[key]] == pytest.approx([v for _, v in entries])
    assert merged.record_count == len(sample_records)


def test_merge_rejects_mixed_backends():
    with pytest.raises(ValueError):
        build_aggregation_store("mapping").merge(build_aggregation_store("tree"))
