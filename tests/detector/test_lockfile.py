"""Unit tests for the upward lockfile / manifest search."""

from pmdispatch.detector.lockfile import find_lockfile, find_up


class TestFindUp:
    def test_finds_file_in_cwd(self, tmp_repo):
        (tmp_repo / "package.json").write_text("{}")
        assert find_up(["package.json"], tmp_repo) == (tmp_repo / "package.json").resolve()

    def test_walks_up_to_parent(self, tmp_repo):
        (tmp_repo / "package.json").write_text("{}")
        nested = tmp_repo / "packages" / "app" / "src"
        nested.mkdir(parents=True)
        assert find_up(["package.json"], nested) == (tmp_repo / "package.json").resolve()

    def test_nearest_wins(self, tmp_repo):
        (tmp_repo / "package.json").write_text("{}")
        app = tmp_repo / "app"
        app.mkdir()
        (app / "package.json").write_text("{}")
        assert find_up(["package.json"], app) == (app / "package.json").resolve()

    def test_directories_are_not_matches(self, tmp_repo):
        (tmp_repo / "yarn.lock").mkdir()
        assert find_up(["yarn.lock"], tmp_repo) is None

    def test_missing_returns_none(self, tmp_repo):
        assert find_up(["definitely-not-here.lock"], tmp_repo) is None


class TestFindLockfile:
    def test_pnpm_beats_yarn_in_same_directory(self, tmp_repo):
        (tmp_repo / "yarn.lock").write_text("")
        (tmp_repo / "pnpm-lock.yaml").write_text("")
        assert find_lockfile(tmp_repo).name == "pnpm-lock.yaml"

    def test_bun_beats_everything(self, tmp_repo):
        for name in ("package-lock.json", "yarn.lock", "pnpm-lock.yaml", "bun.lockb"):
            (tmp_repo / name).write_text("")
        assert find_lockfile(tmp_repo).name == "bun.lockb"

    def test_nearer_directory_beats_priority(self, tmp_repo):
        (tmp_repo / "bun.lockb").write_text("")
        app = tmp_repo / "app"
        app.mkdir()
        (app / "package-lock.json").write_text("{}")
        assert find_lockfile(app).name == "package-lock.json"
