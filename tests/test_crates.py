import json

import pytest

from deplens.clients.crates import (
    BASE_URL_CRATES,
    BASE_URL_INDEX,
    QUERY_STRING_CRATE_MULTI,
    QUERY_STRING_CRATE_SINGLE,
    CrateData,
    CrateDataMulti,
    CrateDataSingle,
    CrateDataVersion,
    IndexMetadata,
    IndexMetadataDependency,
    crate_data_url,
    crate_search_url,
    sparse_index_url,
)


def _crate(name="tokio"):
    return {
        "name": name,
        "description": "An async runtime",
        "created_at": "2016-01-01",
        "updated_at": "2024-01-01",
        "documentation": "docs",
        "repository": None,
        "downloads": 1000,
        "recent_downloads": 50,
    }


def _version():
    return {
        "id": 7,
        "crate": "tokio",
        "num": "1.25.0",
        "created_at": "2023-01-01",
        "updated_at": "2023-01-02",
        "downloads": 42,
        "features": {"full": ["macros", "rt"]},
    }


def test_sparse_index_url_short_names():
    assert sparse_index_url("a") == "https://index.crates.io/1/a"
    assert sparse_index_url("syn") == "https://index.crates.io/3/s/syn"


def test_sparse_index_url_long_name():
    assert sparse_index_url("serde") == "https://index.crates.io/se/rd/serde"


def test_sparse_index_url_is_case_insensitive():
    assert sparse_index_url("SeRdE") == sparse_index_url("serde")
    assert sparse_index_url("AB").startswith(BASE_URL_INDEX)
    assert sparse_index_url("AB").endswith("/ab")


def test_crate_data_url_trims_and_lowers():
    url = crate_data_url("  Tokio ")
    assert url == crate_data_url("tokio")
    assert url.startswith(BASE_URL_CRATES + "/tokio")
    assert url.endswith(QUERY_STRING_CRATE_SINGLE)


def test_crate_search_url():
    url = crate_search_url(" Serde ")
    assert url.startswith(BASE_URL_CRATES + QUERY_STRING_CRATE_MULTI)
    assert url.endswith("&q=serde")


def test_crate_data_flattened_fields():
    data = CrateData.from_dict(_crate())
    assert data.name == "tokio"
    assert data.links.documentation == "docs"
    assert data.links.repository is None
    assert data.links.homepage is None
    assert data.downloads.total_count == 1000
    assert data.downloads.recent_count == 50


def test_crate_data_missing_field_raises():
    crate = _crate()
    del crate["recent_downloads"]
    with pytest.raises(ValueError):
        CrateData.from_dict(crate)


def test_crate_version_aliases():
    version = CrateDataVersion.from_dict(_version())
    assert version.name == "tokio"
    assert version.version == "1.25.0"
    assert version.raw_version_string() == "1.25.0"
    assert version.features == {"full": ["macros", "rt"]}


def test_crate_single_from_json_round_trip():
    single = CrateDataSingle.from_json(json.dumps({"crate": _crate(), "versions": [_version()]}))
    assert single.inner.name == "tokio"
    assert [v.version for v in single.versions] == ["1.25.0"]


def test_crate_single_versions_default_empty():
    single = CrateDataSingle.from_json(json.dumps({"crate": _crate()}))
    assert single.versions == []


def test_crate_single_missing_crate_raises():
    with pytest.raises(ValueError):
        CrateDataSingle.from_json(json.dumps({"versions": []}))


def test_crate_multi_from_json():
    multi = CrateDataMulti.from_json(json.dumps({"crates": [_crate("serde"), _crate("tokio")]}))
    assert [c.name for c in multi.inner] == ["serde", "tokio"]


def test_index_dependency_req_alias():
    dep = IndexMetadataDependency.from_dict(
        {"name": "bytes", "req": "^1", "features": [], "optional": False, "default_features": True}
    )
    assert dep.version_requirement == "^1"
    assert dep.optional is False
    assert dep.default_features is True


def test_index_metadata_try_from_lines():
    lines = [
        json.dumps({"name": "tokio", "vers": "1.0.0"}),
        json.dumps(
            {
                "name": "tokio",
                "vers": "1.1.0",
                "deps": [
                    {
                        "name": "bytes",
                        "req": "^1",
                        "features": ["std"],
                        "optional": True,
                        "default_features": False,
                    }
                ],
                "feats": {"full": ["rt"]},
            }
        ),
    ]
    metas = IndexMetadata.try_from_lines(lines)
    assert [m.raw_version_string() for m in metas] == ["1.0.0", "1.1.0"]
    assert metas[0].dependencies == []
    assert metas[0].features == {}
    assert metas[1].dependencies[0].features == ["std"]
    assert metas[1].features == {"full": ["rt"]}


def test_index_metadata_bad_line_raises():
    with pytest.raises(ValueError):
        IndexMetadata.try_from_lines([json.dumps({"name": "a", "vers": "1"}), "not json"])