"""Tests for the sub-project layout model."""

from git_sub_project import layout


class TestPointerLine:
    def test_default_pointer_line(self):
        assert layout.pointer_line() == "gitdir: .git-sub-project\n"

    def test_custom_metadata_name(self):
        assert layout.pointer_line(".git-vendored") == "gitdir: .git-vendored\n"

    def test_matches_with_and_without_newline(self):
        assert layout.pointer_matches("gitdir: .git-sub-project\n")
        assert layout.pointer_matches("gitdir: .git-sub-project")

    def test_rejects_other_targets(self):
        assert not layout.pointer_matches("gitdir: .git-wrong\n")
        assert not layout.pointer_matches("gitdir: /abs/path/.git-sub-project\n")
        assert not layout.pointer_matches("gitdir: .git-sub-project\n\n")
        assert not layout.pointer_matches("")


class TestMetadataStructure:
    def test_full_structure(self, tmp_path, make_metadata):
        meta = make_metadata(tmp_path)
        assert layout.is_metadata_dir(meta)
        assert layout.missing_metadata_entries(meta) == []

    def test_empty_metadata_dir(self, tmp_path):
        meta = tmp_path / ".git-sub-project"
        meta.mkdir()
        assert not layout.is_metadata_dir(meta)
        assert layout.missing_metadata_entries(meta) == ["objects", "refs", "HEAD", "config"]

    def test_missing_config_only(self, tmp_path, make_metadata):
        meta = make_metadata(tmp_path)
        (meta / "config").unlink()
        assert layout.missing_metadata_entries(meta) == ["config"]

    def test_head_must_be_a_file(self, tmp_path, make_metadata):
        meta = make_metadata(tmp_path)
        (meta / "HEAD").unlink()
        (meta / "HEAD").mkdir()
        assert not layout.is_metadata_dir(meta)


class TestClassify:
    def test_missing(self, tmp_path):
        assert layout.classify(tmp_path / "nope") == layout.MISSING

    def test_file_is_missing(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")
        assert layout.classify(target) == layout.MISSING

    def test_unlinked(self, make_unlinked):
        assert layout.classify(make_unlinked("lib")) == layout.UNLINKED

    def test_linked(self, make_unlinked):
        lib = make_unlinked("lib")
        layout.write_pointer(lib)
        assert layout.classify(lib) == layout.LINKED

    def test_blocked_beats_metadata(self, make_unlinked):
        lib = make_unlinked("lib")
        (lib / ".git").mkdir()
        assert layout.classify(lib) == layout.BLOCKED

    def test_no_metadata(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert layout.classify(tmp_path / "empty") == layout.NO_METADATA

    def test_conflict(self, make_unlinked):
        lib = make_unlinked("lib")
        (lib / ".git").write_text("gitdir: .git-wrong\n")
        assert layout.classify(lib) == layout.CONFLICT

    def test_dangling_symlink_is_conflict(self, make_unlinked):
        lib = make_unlinked("lib")
        (lib / ".git").symlink_to(lib / "does-not-exist")
        assert layout.classify(lib) == layout.CONFLICT

    def test_undecodable_pointer_is_conflict(self, make_unlinked):
        lib = make_unlinked("lib")
        (lib / ".git").write_bytes(b"\xff\xfe\x00garbage")
        assert layout.read_pointer(lib) is not None
        assert layout.classify(lib) == layout.CONFLICT

    def test_read_pointer(self, make_unlinked):
        lib = make_unlinked("lib")
        assert layout.read_pointer(lib) is None
        layout.write_pointer(lib)
        assert layout.read_pointer(lib) == "gitdir: .git-sub-project\n"
