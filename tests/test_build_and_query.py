import pytest

from similar_files.config import SimilarityConfig
from similar_files.errors import CorruptIndexError, IndexNotFoundError, InvalidQueryError
from similar_files.index_store import JsonIndexStore, default_index_dir
from similar_files.indexing.pipeline import IndexService, build_index
from similar_files.search.pipeline import Query, SimilarityService, find_similar, result_lines


def test_build_writes_aligned_index(workspace, small_config):
    summary = build_index(workspace, small_config)

    assert summary.doc_count == 3
    assert summary.skipped == 0
    assert summary.by_extension == {".md": 3}
    index = JsonIndexStore(default_index_dir(workspace)).load()
    assert index.hash_dim == 64
    assert [m.path for m in index.metadata] == ["001.md", "002.md", "003.md"]
    assert len(index.vectors) == index.doc_count == 3
    assert index.vectors[2] == {}
    assert index.root_path == str(workspace.resolve())


def test_build_is_reproducible(workspace, small_config, tmp_path):
    build_index(workspace, small_config, index_dir=tmp_path / "first")
    build_index(workspace, small_config, index_dir=tmp_path / "second")
    first = JsonIndexStore(tmp_path / "first").load()
    second = JsonIndexStore(tmp_path / "second").load()
    assert first.vectors == second.vectors
    assert first.metadata == second.metadata


def test_build_skips_unreadable_files_and_excluded_dirs(project_tree, tmp_path):
    root = project_tree["readme"].parent
    summary = IndexService(SimilarityConfig(hash_dim=256)).run(root, index_dir=tmp_path / "idx")

    assert summary.skipped == 1
    assert summary.doc_count == 3
    paths = [m.path for m in JsonIndexStore(tmp_path / "idx").load().metadata]
    assert paths == ["README.md", "src/auth_middleware.py", "src/session-store.ts"]


def test_build_with_no_files_writes_nothing(tmp_path, small_config):
    summary = build_index(tmp_path, small_config)
    assert summary.doc_count == 0
    assert summary.index_file is None
    assert not JsonIndexStore(default_index_dir(tmp_path)).exists()


def test_text_query_shares_term_scenario(workspace, small_config):
    build_index(workspace, small_config)
    service = SimilarityService(small_config, cwd=workspace)

    response = service.find_similar(Query.from_text("cat dog cat"), threshold=0.0)
    by_path = {r.path: r.similarity for r in response.results}
    assert by_path["001.md"] == pytest.approx(1.0)
    assert 0 < by_path["002.md"] < 1
    assert by_path["003.md"] == 0.0
    assert response.query == "cat dog cat"


def test_file_query_excludes_itself(workspace, small_config):
    build_index(workspace, small_config)

    response = find_similar(Query.from_file("001.md"), small_config, cwd=workspace)
    assert [r.path for r in response.results] == ["002.md"]
    assert 0 < response.results[0].similarity < 1
    assert response.query == "001.md"

    absolute = find_similar(
        Query.from_file(workspace / "002.md"),
        small_config,
        index_dir=default_index_dir(workspace),
        cwd=workspace.parent,
    )
    assert "002.md" not in [r.path for r in absolute.results]


def test_empty_document_never_matches_positive_threshold(workspace, small_config):
    build_index(workspace, small_config)
    for text in ("cat", "dog", "bird", "cat dog bird"):
        response = find_similar(Query.from_text(text), small_config, cwd=workspace, threshold=0.01)
        assert "003.md" not in [r.path for r in response.results]


def test_threshold_and_top_contract(project_tree, tmp_path):
    root = project_tree["readme"].parent
    config = SimilarityConfig(hash_dim=256)
    build_index(root, config, index_dir=tmp_path / "idx")

    for threshold in (0.0, 0.05, 0.2, 0.5):
        for top in (1, 2, 10):
            response = find_similar(
                Query.from_text("authenticate sessions token store"),
                config,
                index_dir=tmp_path / "idx",
                top=top,
                threshold=threshold,
            )
            scores = [r.similarity for r in response.results]
            assert len(scores) <= top
            assert scores == sorted(scores, reverse=True)
            assert all(score >= round(threshold, 2) for score in scores)


def test_query_idf_modes_both_rank_shared_terms(workspace):
    for mode in ("corpus", "query"):
        config = SimilarityConfig(hash_dim=64, query_idf=mode)
        build_index(workspace, config)
        response = find_similar(Query.from_text("bird"), config, cwd=workspace)
        assert [r.path for r in response.results] == ["002.md"]


def test_query_errors(workspace, small_config, tmp_path):
    with pytest.raises(IndexNotFoundError):
        find_similar(Query.from_text("cat"), small_config, index_dir=tmp_path / "nowhere")

    build_index(workspace, small_config)
    with pytest.raises(InvalidQueryError):
        find_similar(Query.from_text("   "), small_config, cwd=workspace)
    with pytest.raises(InvalidQueryError):
        find_similar(Query.from_file("missing.md"), small_config, cwd=workspace)

    store = JsonIndexStore(default_index_dir(workspace))
    store.index_file.write_text('{"version": 4, "vectors": []}', encoding="utf-8")
    with pytest.raises(CorruptIndexError):
        find_similar(Query.from_text("cat"), small_config, cwd=workspace)


def test_result_lines_show_title_when_it_differs(project_tree, tmp_path):
    root = project_tree["readme"].parent
    config = SimilarityConfig(hash_dim=256)
    build_index(root, config, index_dir=tmp_path / "idx")

    response = find_similar(Query.from_text("session store token"), config, index_dir=tmp_path / "idx", threshold=0.0)
    lines = result_lines(response)
    assert lines[0] == "Similar files to: session store token"
    assert any(line.startswith("1. ") for line in lines)
    assert '   "Session store backed by memory"' in lines
