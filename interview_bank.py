"""interview_bank.py — Core of the interview question bank viewer.

Architecture — three layers, each with one responsibility:

    ┌──────────────────────────────────────────────────────────┐
    │  TkView  (View layer, interview_bank_gui.py)             │
    │  • Builds and updates Tkinter widgets                    │
    │  • Translates user events into controller calls          │
    │  • Contains ZERO business rules                          │
    └──────────────────────────────┬───────────────────────────┘
                                   │ calls
    ┌──────────────────────────────▼───────────────────────────┐
    │  AppController  (Controller layer)                       │
    │  • Owns the active school / active question index        │
    │  • Circular navigation, favorite toggling, search        │
    │  • Returns plain dicts for the view to render            │
    │  • Never imports tkinter                                 │
    └──────────────────────────────┬───────────────────────────┘
                                   │ calls
    ┌──────────────────────────────▼───────────────────────────┐
    │  QuestionBank / SearchIndex / SessionStore / BlobStore   │
    │  • Normalises the question document once at startup      │
    │  • Flat search haystacks over every school               │
    │  • Reads, migrates and writes the persisted session      │
    └──────────────────────────────────────────────────────────┘

The question document comes in two shapes:

    {"schools": [{"id", "name", "menuName", "questions": [...]}, ...]}
    {"questions": [{"id", "question", "answer"}, ...]}           (legacy)

The legacy single-bank shape is loaded as a bank with exactly one school, so
everything above the loader only ever deals with schools.
"""

import json
import logging
import math
import os
import re
import time
from collections import namedtuple


logger = logging.getLogger(__name__)


# ── Directory layout ──────────────────────────────────────────────────────────
# All paths are relative to the directory that contains this script unless
# INTERVIEW_BANK_HOME points somewhere else.

BASE_DIR  = os.environ.get("INTERVIEW_BANK_HOME") or os.path.dirname(os.path.abspath(__file__))
DATA_PATH = os.path.join(BASE_DIR, "data", "questions.json")  # the question document

# Single key under which the whole session is stored.  The name is kept from
# the first release so existing saved sessions keep loading.
STORAGE_KEY = "tjis_interview_bank_v1"

# Only the first N search matches are ever shown.
SEARCH_RESULT_LIMIT = 50

DEFAULT_SCHOOL_ID   = "school-1"
DEFAULT_SCHOOL_NAME = "某某学校"
EMPTY_BANK_TEXT     = "题库为空"
LOAD_FAILED_TEXT    = "加载失败，请检查文件是否完整。"


class BankLoadError(Exception):
    """The question document could not be read or parsed."""


def _now_ms():
    return int(time.time() * 1000)


def _is_number(value):
    """True for finite ints/floats.  bool is excluded even though it is an int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def clamp_circular(idx, total):
    """Wrap idx into [0, total).

    Stepping past the last question lands on the first one and stepping back
    from the first lands on the last.  Returns 0 for an empty list or a
    non-numeric index.
    """
    if total <= 0 or not _is_number(idx):
        return 0
    # Python's % already returns a non-negative result for a positive divisor.
    return math.floor(idx) % total


# ══════════════════════════════════════════════════════════════════════════════
# QUESTION BANK
# ══════════════════════════════════════════════════════════════════════════════

Question = namedtuple("Question", ["id", "question", "answer"])
School   = namedtuple("School", ["id", "name", "menu_name", "questions"])

# Tags returned by classify_document().
SHAPE_SCHOOLS      = "schools"
SHAPE_QUESTIONS    = "questions"
SHAPE_UNRECOGNIZED = "unrecognized"


def read_bank_document(path=DATA_PATH):
    """Read and parse the question document.

    Raises BankLoadError if the file is missing, unreadable or not JSON.  The
    shape of the parsed value is not checked here; load_question_bank() does
    that and never fails.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError, bad UTF-8 and over-long integers.
        raise BankLoadError(f"Could not load question bank from {path}") from exc


def classify_document(document):
    """Tag the raw document with its shape.

    Returns:
        (SHAPE_SCHOOLS,      [raw school, ...])
        (SHAPE_QUESTIONS,    [raw question, ...])
        (SHAPE_UNRECOGNIZED, None)
    """
    if isinstance(document, dict):
        if isinstance(document.get("schools"), list):
            return SHAPE_SCHOOLS, document["schools"]
        if isinstance(document.get("questions"), list):
            return SHAPE_QUESTIONS, document["questions"]
    return SHAPE_UNRECOGNIZED, None


def _scalar_text(value):
    """A JSON scalar as text, or None for null, containers and non-finite floats."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # More digits than str() is allowed to render.
            return None
    if isinstance(value, float) and math.isfinite(value):
        return str(value)
    return None


def _coerce_text(value):
    """Question/answer text as a stripped string.  None and containers give ""."""
    return (_scalar_text(value) or "").strip()


def _coerce_label(value):
    """A display string, or None when the document did not supply a usable one."""
    return _scalar_text(value)


def _normalize_question(raw, position):
    raw = raw if isinstance(raw, dict) else {}
    qid = raw.get("id")
    qid = None if isinstance(qid, bool) or not isinstance(qid, (str, int)) else _scalar_text(qid)
    if not qid:
        # Positions are 1-based and zero-padded: q-001, q-002, ...
        qid = f"q-{position:03d}"
    return Question(
        id=qid,
        question=_coerce_text(raw.get("question")),
        answer=_coerce_text(raw.get("answer")),
    )


def _normalize_questions(raw_list):
    questions = (_normalize_question(q, i) for i, q in enumerate(raw_list, start=1))
    return tuple(q for q in questions if q.question)


def _explicit_school_id(raw):
    sid = raw.get("id") if isinstance(raw, dict) else None
    return sid if isinstance(sid, str) and sid else None


def _unique_id(base, taken):
    """base, or base-2, base-3, ... whichever is first not in taken."""
    candidate, n = base, 2
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def _assign_school_ids(raw_schools):
    """One distinct id per raw school, in order.

    Explicit ids are kept on their first occurrence.  Missing ids become
    school-<position> and repeated explicit ids get a -2, -3 ... suffix; both
    skip every id used anywhere in the document.
    """
    explicit = {sid for sid in map(_explicit_school_id, raw_schools) if sid}
    used     = set()
    ids      = []
    for position, raw in enumerate(raw_schools, start=1):
        sid = _explicit_school_id(raw)
        if sid is None:
            sid = _unique_id(f"school-{position}", used | explicit)
        elif sid in used:
            sid = _unique_id(sid, used | explicit)
        used.add(sid)
        ids.append(sid)
    return ids


def _normalize_school(raw, position, sid):
    raw      = raw if isinstance(raw, dict) else {}
    fallback = f"学校{position}"

    name = _coerce_label(raw.get("name"))
    menu = _coerce_label(raw.get("menuName"))
    if menu is None:
        menu = name if name is not None else fallback
    if name is None:
        name = fallback

    raw_questions = raw.get("questions")
    questions = _normalize_questions(raw_questions) if isinstance(raw_questions, list) else ()
    return School(id=sid, name=name, menu_name=menu, questions=questions)


def load_question_bank(document):
    """Normalise a parsed question document into an immutable bank.

    Returns a tuple of School.  A document of neither known shape degrades to
    one empty default school so the view can show the "bank is empty" state.
    """
    shape, payload = classify_document(document)

    if shape == SHAPE_SCHOOLS:
        schools = (
            _normalize_school(raw, position, sid)
            for position, (raw, sid) in enumerate(zip(payload, _assign_school_ids(payload)), start=1)
        )
        # Schools without questions stay in the menu as long as they have a name.
        bank = tuple(s for s in schools if s.questions or s.name)
    else:
        if shape == SHAPE_UNRECOGNIZED:
            logger.warning("Question document has no 'schools' or 'questions' list; using an empty bank")
        questions = _normalize_questions(payload) if payload is not None else ()
        bank = (School(
            id=DEFAULT_SCHOOL_ID,
            name=DEFAULT_SCHOOL_NAME,
            menu_name=DEFAULT_SCHOOL_NAME,
            questions=questions,
        ),)

    logger.info(
        "Loaded %d school(s) with %d question(s)",
        len(bank), sum(len(s.questions) for s in bank),
    )
    return bank


# ══════════════════════════════════════════════════════════════════════════════
# SEARCH INDEX
# ══════════════════════════════════════════════════════════════════════════════

_WHITESPACE_RE = re.compile(r"\s+")

SearchEntry = namedtuple(
    "SearchEntry", ["question_id", "school_id", "school_name", "school_index", "text", "haystack"]
)


def normalize_text(text):
    """Lowercase, collapse whitespace runs to one space, strip the ends."""
    if text is None:
        text = ""
    return _WHITESPACE_RE.sub(" ", str(text).lower()).strip()


class SearchIndex:
    """Flat list of normalised question texts across every school.

    Built once from the bank and never mutated.  Entries keep bank order
    (school order, then question order), which is also the result order.
    """

    def __init__(self, bank):
        self._entries = tuple(
            SearchEntry(
                question_id=q.id,
                school_id=school.id,
                school_name=school.name,
                school_index=index,
                text=q.question,
                haystack=normalize_text(q.question),
            )
            for school in bank
            for index, q in enumerate(school.questions)
        )

    def __len__(self):
        return len(self._entries)

    @property
    def entries(self):
        return self._entries

    def query(self, keyword):
        """Return every entry whose haystack contains all keyword tokens.

        Tokens are the space-separated parts of the normalised keyword and are
        matched as plain substrings, in any order.  An empty or whitespace-only
        keyword matches nothing.  The full match list is returned; trimming it
        for display is the caller's job (see SEARCH_RESULT_LIMIT).
        """
        kw = normalize_text(keyword)
        if not kw:
            return []
        tokens = [t for t in kw.split(" ") if t]
        return [e for e in self._entries if all(t in e.haystack for t in tokens)]


# ══════════════════════════════════════════════════════════════════════════════
# STORAGE LAYER
# ══════════════════════════════════════════════════════════════════════════════

class BlobStore:
    """String key-value store kept in .local/storage.json.

    Values are opaque strings; the session layer decides what goes in them.
    Every set() is written to disk immediately.
    """

    def __init__(self, base_dir=BASE_DIR):
        local_dir  = os.path.join(base_dir, ".local")
        self._path = os.path.join(local_dir, "storage.json")

        os.makedirs(local_dir, exist_ok=True)
        self._data = {}
        if os.path.exists(self._path):
            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    self._data = json.load(f)
            except (OSError, ValueError, RecursionError):
                # Unreadable or corrupt file: start empty rather than crash.
                # The next set() overwrites it.
                logger.warning("Ignoring unreadable storage file %s", self._path)
        if not isinstance(self._data, dict):
            self._data = {}

    @property
    def path(self):
        return self._path

    def _flush(self):
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key):
        """Return the stored string for key, or None."""
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key, value):
        self._data[key] = value
        self._flush()


class SessionState:
    """The user's persisted position and favorites.

    Attributes:
        current_school_id:    id of the school shown last
        last_index_by_school: {school_id: question index}; may be stale, so
                              always clamp before use
        favorites_by_school:  {school_id: {question_id: True}}; an id is
                              favorited iff it is a key
        updated_at:           epoch milliseconds of the last persist()
        legacy_favorites:     favorites of the single-bank format, or None
                              once migrated
        legacy_last_index:    last index of the single-bank format, or None
    """

    def __init__(self, current_school_id="", last_index_by_school=None,
                 favorites_by_school=None, updated_at=0,
                 legacy_favorites=None, legacy_last_index=None):
        self.current_school_id    = current_school_id
        self.last_index_by_school = last_index_by_school if last_index_by_school is not None else {}
        self.favorites_by_school  = favorites_by_school if favorites_by_school is not None else {}
        self.updated_at           = updated_at
        self.legacy_favorites     = legacy_favorites
        self.legacy_last_index    = legacy_last_index

    @property
    def has_legacy(self):
        return self.legacy_favorites is not None or self.legacy_last_index is not None

    def to_dict(self):
        """JSON-ready form.

        Pending legacy fields are written back under their old keys so a
        migration that could not run yet survives the next persist.
        """
        data = {
            "currentSchoolId":   self.current_school_id,
            "lastIndexBySchool": dict(self.last_index_by_school),
            "favoritesBySchool": {
                sid: dict(favs) for sid, favs in self.favorites_by_school.items()
            },
            "updatedAt":         self.updated_at,
        }
        if self.legacy_favorites is not None:
            data["favorites"] = dict(self.legacy_favorites)
        if self.legacy_last_index is not None:
            data["lastIndex"] = self.legacy_last_index
        return data

    def __eq__(self, other):
        if not isinstance(other, SessionState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"SessionState({self.to_dict()!r})"


# ── Defensive field readers ───────────────────────────────────────────────────
# Each reader returns its default for a value of the wrong shape, so one bad
# field never throws away the rest of the saved session.

def _read_index(value):
    return math.floor(value) if _is_number(value) else None


def _read_index_map(value):
    if not isinstance(value, dict):
        return {}
    result = {}
    for sid, idx in value.items():
        idx = _read_index(idx)
        if isinstance(sid, str) and idx is not None:
            result[sid] = idx
    return result


def _read_favorites(value):
    """{question_id: True} for every truthy entry, or None if not a mapping."""
    if not isinstance(value, dict):
        return None
    return {qid: True for qid, flag in value.items() if isinstance(qid, str) and flag}


def _read_favorites_by_school(value):
    if not isinstance(value, dict):
        return {}
    result = {}
    for sid, favs in value.items():
        favs = _read_favorites(favs)
        if isinstance(sid, str) and favs is not None:
            result[sid] = favs
    return result


class SessionStore:
    """Reads, migrates and writes the SessionState.

    The clock is injectable (a callable returning epoch milliseconds) so tests
    can control updatedAt.
    """

    def __init__(self, blob_store, clock=None):
        self._blobs = blob_store
        self._clock = clock or _now_ms

    def default_state(self):
        return SessionState(updated_at=self._clock())

    def restore(self, raw):
        """Build a SessionState from the stored blob.

        raw may be the JSON string, bytes, an already-decoded dict, or None.
        Anything that does not decode to a JSON object yields a fresh default
        state.  Never raises.
        """
        data = raw
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                data = json.loads(raw)
            except (ValueError, RecursionError):
                logger.warning("Saved session is not valid JSON; starting fresh")
                data = None
        if not isinstance(data, dict):
            return self.default_state()

        current = data.get("currentSchoolId")
        updated = data.get("updatedAt")
        return SessionState(
            current_school_id=current if isinstance(current, str) else "",
            last_index_by_school=_read_index_map(data.get("lastIndexBySchool")),
            favorites_by_school=_read_favorites_by_school(data.get("favoritesBySchool")),
            updated_at=updated if _is_number(updated) else self._clock(),
            legacy_favorites=_read_favorites(data.get("favorites")),
            legacy_last_index=_read_index(data.get("lastIndex")),
        )

    def load(self):
        return self.restore(self._blobs.get(STORAGE_KEY))

    def persist(self, state):
        """Stamp updated_at and write the whole state under STORAGE_KEY."""
        state.updated_at = self._clock()
        self._blobs.set(STORAGE_KEY, json.dumps(state.to_dict(), ensure_ascii=False))

    def migrate_legacy(self, state, bank):
        """Move single-bank favorites/last index onto the first school.

        Runs only while legacy fields are present and the bank has at least one
        school; with an empty bank the migration stays pending.  Clears the
        legacy fields afterwards, so a second call does nothing.  Does not
        persist; the caller does that when this returns True.

        Returns True if anything was migrated.
        """
        if not state.has_legacy:
            return False
        if not bank:
            logger.debug("Legacy session found but the bank is empty; migration deferred")
            return False

        first_id = bank[0].id
        state.favorites_by_school[first_id]  = dict(state.legacy_favorites or {})
        state.last_index_by_school[first_id] = state.legacy_last_index or 0
        state.legacy_favorites  = None
        state.legacy_last_index = None
        logger.info("Migrated single-bank session onto school %s", first_id)
        return True

    def favorites_for(self, state, school_id):
        """Return the favorites mapping of school_id, creating it if missing.

        Side effect: an absent mapping is inserted into state in place (not
        persisted).  Callers mutate the returned dict directly.
        """
        return state.favorites_by_school.setdefault(school_id, {})


# ══════════════════════════════════════════════════════════════════════════════
# CONTROLLER LAYER
# ══════════════════════════════════════════════════════════════════════════════

class AppController:
    """Business-logic layer between the GUI and the bank/session layers.

    Responsibilities:
      - Choosing the active school and keeping the active question index
        inside it (circular navigation)
      - Toggling favorites and listing them in question order
      - Running searches and shaping the rows the view lists
      - Persisting the session after every mutation, before returning
      - Returning plain Python values; never tkinter objects

    Every command returns the view-state dict from get_view_state() (or a
    result dict for search/favorites) so the view can re-render without
    reading controller fields.
    """

    def __init__(self, base_dir=BASE_DIR, blob_store=None, clock=None):
        self._data_path = os.path.join(base_dir, "data", "questions.json")
        self.sessions   = SessionStore(blob_store or BlobStore(base_dir=base_dir), clock=clock)
        self.state      = self.sessions.load()

        self.bank           = ()
        self._schools_by_id = {}
        self.search_index   = SearchIndex(self.bank)

        # ── Navigation state ──────────────────────────────────────────────────
        self.active_school_id = ""
        self.active_questions = ()
        self.active_index     = 0

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _school(self, school_id):
        return self._schools_by_id.get(school_id)

    def _favorites(self):
        return self.sessions.favorites_for(self.state, self.active_school_id)

    def current_question(self):
        """The Question at the active index, or None for an empty school."""
        if not self.active_questions:
            return None
        return self.active_questions[self.active_index]

    # ── Startup ───────────────────────────────────────────────────────────────

    def load_bank_file(self, path=None):
        """Read the question document from disk and load it.

        Raises BankLoadError if the file cannot be read or parsed.
        """
        return self.load_bank(read_bank_document(path or self._data_path))

    def load_bank(self, document):
        """Install a parsed question document and restore the position.

        Migrates a legacy single-bank session onto the first school (and
        persists) if one is pending, then resumes the saved school, falling
        back to the first school.  The saved index is clamped, not rewritten.
        """
        self.bank           = load_question_bank(document)
        self.search_index   = SearchIndex(self.bank)
        self._schools_by_id = {s.id: s for s in self.bank}

        if self.sessions.migrate_legacy(self.state, self.bank):
            self.sessions.persist(self.state)

        school = self._school(self.state.current_school_id)
        if school is None and self.bank:
            school = self.bank[0]

        self.active_school_id = school.id if school else ""
        self.active_questions = school.questions if school else ()
        self.active_index     = clamp_circular(
            self.state.last_index_by_school.get(self.active_school_id, 0),
            len(self.active_questions),
        )
        return self.get_view_state()

    # ── Navigation ────────────────────────────────────────────────────────────

    def select_school(self, school_id, index=None):
        """Switch to another school.

        An unknown school_id is ignored.  index (if a finite number) picks the
        question to show; otherwise the school's saved index is used.  Only
        currentSchoolId is written back; the saved index of the school is left
        alone (a missing one is recorded as 0).
        """
        school = self._school(school_id)
        if school is None:
            return self.get_view_state()

        self.active_school_id        = school.id
        self.active_questions        = school.questions
        self.state.current_school_id = school.id

        stored = self.state.last_index_by_school.setdefault(school.id, 0)
        self.active_index = clamp_circular(
            index if _is_number(index) else stored, len(self.active_questions)
        )
        self.sessions.persist(self.state)
        return self.get_view_state()

    def jump_to(self, index):
        """Show question `index` of the active school (wrapping) and save it."""
        self.active_index = clamp_circular(index, len(self.active_questions))
        self.state.last_index_by_school[self.active_school_id] = self.active_index
        self.sessions.persist(self.state)
        return self.get_view_state()

    def move(self, delta):
        """Step forward (delta > 0) or back (delta < 0), wrapping at both ends."""
        return self.jump_to(self.active_index + delta)

    def next_question(self):
        return self.move(1)

    def prev_question(self):
        return self.move(-1)

    # ── Favorites ─────────────────────────────────────────────────────────────

    def toggle_favorite(self):
        """Add the current question to the favorites, or remove it.

        Does nothing when the active school has no questions.
        """
        question = self.current_question()
        if question is None:
            return self.get_view_state()

        favorites = self._favorites()
        if question.id in favorites:
            del favorites[question.id]
        else:
            favorites[question.id] = True
        self.sessions.persist(self.state)
        return self.get_view_state()

    def favorite_list(self):
        """Favorited questions of the active school, in question-list order.

        Returns:
            [{"question": Question, "index": 0-based position}, ...]
        """
        favorites = self._favorites()
        return [
            {"question": q, "index": i}
            for i, q in enumerate(self.active_questions)
            if favorites.get(q.id)
        ]

    def get_favorites_view(self):
        """Rows for the favorites dialog.

        Returns:
            {
                "header":    "School · 共 3 题",
                "rows":      [{"title", "meta", "school_id", "index"}, ...],
                "empty_row": {"title", "meta"} or None,
            }
        """
        items  = self.favorite_list()
        school = self._school(self.active_school_id)
        header = f"共 {len(items)} 题"
        if school:
            header = f"{school.name} · {header}"

        rows = [
            {
                "title":     item["question"].question,
                "meta":      f"第 {item['index'] + 1} 题",
                "school_id": self.active_school_id,
                "index":     item["index"],
            }
            for item in items
        ]
        empty_row = None
        if not rows:
            empty_row = {"title": "暂无收藏", "meta": "点击“收藏”即可加入列表"}
        return {"header": header, "rows": rows, "empty_row": empty_row}

    def open_favorite(self, index):
        return self.jump_to(index)

    # ── Search ────────────────────────────────────────────────────────────────

    def search(self, keyword):
        """All SearchEntry matches for keyword, across every school."""
        return self.search_index.query(keyword)

    def get_search_results(self, keyword):
        """Rows for the search dialog, capped at SEARCH_RESULT_LIMIT.

        Returns:
            {
                "total":     number of matches before the cap,
                "rows":      [{"title", "meta", "school_id", "index"}, ...],
                "empty_row": {"title", "meta"} when a non-empty keyword
                             matched nothing, else None,
            }
        """
        matches = self.search(keyword)
        rows = []
        for entry in matches[:SEARCH_RESULT_LIMIT]:
            rows.append({
                "title":     entry.text,
                "meta":      f"{entry.school_name or '学校'} · 第 {entry.school_index + 1} 题",
                "school_id": entry.school_id,
                "index":     entry.school_index,
            })

        empty_row = None
        if not matches and normalize_text(keyword):
            empty_row = {"title": "没有匹配结果", "meta": "试试换个关键词"}
        return {"total": len(matches), "rows": rows, "empty_row": empty_row}

    def open_search_result(self, school_id, index):
        return self.select_school(school_id, index)

    # ── View state ────────────────────────────────────────────────────────────

    def get_school_menu(self):
        """[{"id", "label", "active"}, ...] in bank order."""
        return [
            {
                "id":     s.id,
                "label":  s.menu_name or s.name,
                "active": s.id == self.active_school_id,
            }
            for s in self.bank
        ]

    def get_view_state(self):
        """Return a snapshot of everything the main screen shows.

        Returns:
            {
                "title":          "School name",
                "school_id":      "school-1",
                "question_count": 12,
                "favorite_count": 3,
                "index":          0,
                "position":       "第 1 / 12 题"  ("" when empty),
                "question":       question text  (EMPTY_BANK_TEXT when empty),
                "answer":         answer text,
                "is_favorite":    True / False,
                "is_empty":       True when the school has no questions,
                "schools":        get_school_menu(),
            }
        """
        school    = self._school(self.active_school_id)
        question  = self.current_question()
        favorites = self._favorites()
        total     = len(self.active_questions)

        return {
            "title":          school.name if school else DEFAULT_SCHOOL_NAME,
            "school_id":      self.active_school_id,
            "question_count": total,
            "favorite_count": len(favorites),
            "index":          self.active_index,
            "position":       f"第 {self.active_index + 1} / {total} 题" if question else "",
            "question":       question.question if question else EMPTY_BANK_TEXT,
            "answer":         question.answer if question else "",
            "is_favorite":    bool(question and favorites.get(question.id)),
            "is_empty":       question is None,
            "schools":        self.get_school_menu(),
        }
