import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from interview_bank import AppController, BlobStore


class FakeClock:
    """Callable clock that moves forward 1 ms every time it is read."""

    def __init__(self, start=1_000):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


def make_questions(*texts):
    return [{"question": text, "answer": f"answer to {text}"} for text in texts]


MULTI_SCHOOL_DOC = {
    "schools": [
        {
            "id": "s1",
            "name": "School One",
            "menuName": "One",
            "questions": [
                {"id": "a", "question": "What is a process?", "answer": "A running program."},
                {"id": "b", "question": "What is a thread?", "answer": "A unit of scheduling."},
                {"id": "c", "question": "Explain Java GC", "answer": "Mark and sweep."},
            ],
        },
        {
            "id": "s2",
            "name": "School Two",
            "questions": [
                {"id": "x", "question": "Java networking basics", "answer": "Sockets."},
                {"id": "y", "question": "What is TCP?", "answer": "A transport protocol."},
            ],
        },
    ]
}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def base_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def blob_store(base_dir):
    return BlobStore(base_dir=base_dir)


@pytest.fixture
def make_controller(base_dir, clock):
    """Build a controller on the temporary directory and load a document into it."""

    def _make(document=MULTI_SCHOOL_DOC):
        ctrl = AppController(base_dir=base_dir, clock=clock)
        ctrl.load_bank(document)
        return ctrl

    return _make
