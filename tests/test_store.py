"""
Tests collaborateurs — SqlPageStore (SQLite temporaire), LocalFileStorage,
catalogue des pages (création, chargement path → id, suppression).
"""
import pytest
from sqlalchemy import text

from page_composer import (
    Block, Document, LocalFileStorage, PageConfig, PageEditSession, PageNotFound,
    PersistenceError, SqlPageStore, UploadedFile,
    create_page, delete_page, list_pages, load_page, new_page, slugify,
)


@pytest.fixture
def store(tmp_path):
    s = SqlPageStore(f"sqlite:///{tmp_path / 'test.db'}")
    s.init_db()
    return s


def _raw_update(store, page_id, **cols):
    sets = ", ".join(f"{k} = :{k}" for k in cols)
    with store.engine.begin() as conn:
        conn.execute(text(f"UPDATE custom_pages SET {sets} WHERE id = :id"), {"id": page_id, **cols})


# ── slugify / new_page ───────────────────────────────────────────────────────

class TestCatalogue:
    @pytest.mark.parametrize("raw,slug", [
        ("Club Lecture", "club-lecture"),
        ("  Sorties   Scolaires ", "sorties-scolaires"),
        ("deja-ok", "deja-ok"),
    ])
    def test_slugify(self, raw, slug):
        assert slugify(raw) == slug

    def test_new_page_is_seeded_draft(self):
        page = new_page("Club", "Club Page", layout="hero", theme="dark")
        assert page.id is None
        assert page.path == "club-page"
        assert (page.layout, page.theme) == ("hero", "dark")
        assert [b.title for b in page.blocks] == ["Featured", "Content"]

    def test_new_page_defaults(self):
        page = new_page("Club", "club")
        assert (page.layout, page.theme) == ("standard", "default")

    def test_new_page_requires_title_and_path(self):
        with pytest.raises(ValueError):
            new_page("", "club")
        with pytest.raises(ValueError):
            new_page("Club", "   ")

    def test_create_and_list_sorted_by_title(self, store):
        create_page(store, new_page("Zoologie", "zoo"))
        create_page(store, new_page("Art", "art"))
        assert [p.title for p in list_pages(store)] == ["Art", "Zoologie"]

    def test_create_persisted_page_rejected(self, store):
        page = create_page(store, new_page("Art", "art"))
        with pytest.raises(ValueError):
            create_page(store, page)


# ── SqlPageStore ─────────────────────────────────────────────────────────────

class TestSqlPageStore:
    def test_create_assigns_id_and_keeps_content(self, store):
        page = create_page(store, new_page("Club", "club", layout="columns-2"))
        assert page.id
        loaded = store.load_page(page.id)
        assert loaded == page
        assert [b.title for b in loaded.blocks] == ["Left Column", "Right Column"]

    def test_load_by_path_then_id(self, store):
        page = create_page(store, new_page("Club", "club"))
        assert load_page(store, "club").id == page.id
        assert load_page(store, page.id).path == "club"

    def test_path_wins_over_id(self, store):
        first = create_page(store, new_page("First", "first"))
        second = create_page(store, new_page("Second", first.id))
        assert load_page(store, first.id).id == second.id

    @pytest.mark.parametrize("identifier", ["nope", ""])
    def test_not_found(self, store, identifier):
        with pytest.raises(PageNotFound):
            load_page(store, identifier)

    def test_duplicate_path(self, store):
        create_page(store, new_page("A", "same"))
        with pytest.raises(PersistenceError):
            create_page(store, new_page("B", "same"))

    def test_save_blocks_full_list(self, store):
        page = create_page(store, new_page("Club", "club"))
        blocks = [
            Block(title="X", body="x", docs=[Document(name="d.pdf", url="http://f/d.pdf")]),
            Block(title="Y", body="y", explicit_type="column"),
        ]
        store.save_page_blocks(page.id, blocks)
        assert store.load_page("club").blocks == blocks

    def test_save_blocks_unknown_page(self, store):
        with pytest.raises(PageNotFound):
            store.save_page_blocks("missing", [])

    def test_save_config(self, store):
        page = create_page(store, new_page("Club", "club"))
        store.save_page_config(page.id, PageConfig(layout="masonry", theme="ocean"))
        loaded = store.load_page(page.id)
        assert (loaded.layout, loaded.theme) == ("masonry", "ocean")

    def test_corrupt_content_loads_empty(self, store):
        page = create_page(store, new_page("Club", "club"))
        _raw_update(store, page.id, content="{broken", config="also broken")
        loaded = store.load_page("club")
        assert loaded.blocks == []
        assert loaded.layout == "standard"

    def test_null_content_loads_empty(self, store):
        page = create_page(store, new_page("Club", "club"))
        _raw_update(store, page.id, content=None)
        assert store.load_page(page.id).blocks == []

    def test_unknown_layout_tolerated(self, store):
        page = create_page(store, new_page("Club", "club", layout="magazine"))
        assert store.load_page(page.id).layout == "magazine"

    def test_delete_cascades(self, store):
        page = create_page(store, new_page("Club", "club"))
        assert delete_page(store, page.id) is True
        with pytest.raises(PageNotFound):
            store.load_page("club")
        assert delete_page(store, page.id) is False


# ── LocalFileStorage ─────────────────────────────────────────────────────────

class TestLocalFileStorage:
    def test_put_file_writes_and_returns_url(self, tmp_path):
        fs = LocalFileStorage(tmp_path / "uploads", base_url="http://school.test/")
        url = fs.put_file(b"hello", "123_notes.txt")
        assert url == "http://school.test/uploads/123_notes.txt"
        assert (tmp_path / "uploads" / "123_notes.txt").read_bytes() == b"hello"

    def test_strips_directories(self, tmp_path):
        fs = LocalFileStorage(tmp_path, base_url="http://s")
        url = fs.put_file(b"x", "../../etc/passwd")
        assert url == "http://s/uploads/passwd"
        assert (tmp_path / "passwd").exists()

    def test_env_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "env"))
        monkeypatch.setenv("BASE_URL", "http://env.test")
        fs = LocalFileStorage()
        assert fs.put_file(b"x", "a.txt") == "http://env.test/uploads/a.txt"


# ── Bout en bout ─────────────────────────────────────────────────────────────

def test_edit_session_round_trip(store, tmp_path):
    page = create_page(store, new_page("Bibliothèque", "bibliotheque", layout="left-sidebar"))
    fs = LocalFileStorage(tmp_path / "files", base_url="http://s")
    with PageEditSession(load_page(store, "bibliotheque"), store, fs) as session:
        session.add_block("card")
        session.edit_block(0, "Horaires", "8h-17h")
        session.add_document(1, UploadedFile(
            name="liste.pdf", size_bytes=4, mime_type="application/pdf", content=b"%PDF",
        )).result(timeout=5)

    loaded = load_page(store, page.id)
    assert [b.title for b in loaded.blocks] == ["Horaires", "Main Content", "New Card"]
    assert loaded.blocks[1].docs[0].name == "liste.pdf"
    assert loaded.blocks[2].explicit_type == "card"
    arrangement = session.arrangement()
    assert arrangement.slot("sidebar").indices == [0]
    assert [it.presentation for it in arrangement.items()] == ["column", "block", "card"]
