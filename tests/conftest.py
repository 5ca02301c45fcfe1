"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pandas as pd
import pytest

from textclassify.console import MLConsole
from textclassify.schemas import GitHubIssue, SentimentData
from textclassify.training.dataset import load_dataset

FOODS = ["steak", "meal", "spaghetti", "pasta", "soup", "burger", "salad", "pizza"]
NEGATIVE_WORDS = ["bad", "horrible", "awful", "terrible"]
POSITIVE_WORDS = ["good", "great", "delicious", "wonderful"]

ISSUE_ROWS = {
    "area-System.Net": [
        ("HttpClient times out on slow proxy", "Requests through the proxy hang until the socket timeout fires."),
        ("WebSocket handshake fails with TLS", "The websocket connection drops during the TLS handshake."),
        ("Socket connect leaks handles", "Each failed socket connect leaks a handle on the network stack."),
        ("HttpClient ignores DNS refresh", "DNS changes are not picked up by pooled http connections."),
        ("SslStream renegotiation throws", "TLS renegotiation on the network stream throws an exception."),
        ("Proxy credentials not sent", "The http proxy never receives the configured credentials."),
        ("WebSockets communication is slow", "Websocket messages over the network arrive with high latency."),
        ("Http2 stream reset not handled", "An http2 stream reset from the server breaks the connection pool."),
    ],
    "area-System.IO": [
        ("File.Copy fails on long paths", "Copying a file with a long path throws a directory not found error."),
        ("FileStream flush loses data", "Data written to the file stream is lost when flush is called twice."),
        ("Directory enumeration skips files", "Enumerating a directory recursively skips hidden files."),
        ("Path.Combine drops drive letter", "Combining a rooted path with a file name drops the drive."),
        ("FileSystemWatcher misses rename", "The watcher does not raise an event when a file is renamed."),
        ("File.ReadAllText wrong encoding", "Reading a text file ignores the byte order mark encoding."),
        ("Directory.Delete fails on readonly", "Deleting a directory with a readonly file throws access denied."),
        ("Pipe stream read blocks forever", "Reading from an anonymous pipe stream blocks when the writer closes the file."),
    ],
    "area-Infrastructure": [
        ("CI build fails on arm64", "The official build pipeline fails on the arm64 agents."),
        ("Update build tools version", "Bump the build tools package used by the ci pipeline."),
        ("Test run times out in CI", "The ci test leg times out on the windows build machines."),
        ("Restore packages from new feed", "Package restore in the build should use the new nuget feed."),
        ("Flaky build agent cleanup", "Build agents are not cleaned up between ci jobs."),
        ("Publish symbols in official build", "The official build pipeline should publish symbol packages."),
        ("Docker image for build outdated", "The docker image used for ci builds needs updated tools."),
        ("Signing step missing in pipeline", "The build pipeline skips the signing step for packages."),
    ],
}


def sentiment_rows() -> list[tuple[str, int]]:
    rows: list[tuple[str, int]] = []
    for food in FOODS:
        for word in NEGATIVE_WORDS:
            rows.append((f"This was a very {word} {food}", 0))
            rows.append((f"The {food} was {word}", 0))
        rows.append((f"I hate this {food}.", 0))
        for word in POSITIVE_WORDS:
            rows.append((f"This was a very {word} {food}", 1))
            rows.append((f"The {food} was {word}", 1))
        rows.append((f"I love this {food}.", 1))
    return rows


@pytest.fixture
def console() -> MLConsole:
    """Plain-print console so output lands in capsys untouched."""
    return MLConsole(enabled=False)


@pytest.fixture
def sentiment_file(tmp_path: Path) -> Path:
    """Write a tab-separated review/label file without header."""
    path = tmp_path / "yelp_labelled.txt"
    path.write_text("".join(f"{text}\t{label}\n" for text, label in sentiment_rows()), encoding="utf-8")
    return path


@pytest.fixture
def sentiment_frame(sentiment_file: Path) -> pd.DataFrame:
    """Load the sentiment fixture through the dataset loader."""
    return load_dataset(sentiment_file, SentimentData.SCHEMA)


def _issue_lines(per_area: slice) -> list[str]:
    lines = ["ID\tArea\tTitle\tDescription"]
    counter = 0
    for area, rows in ISSUE_ROWS.items():
        for title, description in rows[per_area]:
            counter += 1
            lines.append(f"{counter}\t{area}\t{title}\t{description}")
    return lines


@pytest.fixture
def issues_dir(tmp_path: Path) -> Path:
    """Directory holding issues_train.tsv and issues_test.tsv with header rows."""
    data_dir = tmp_path / "issues"
    data_dir.mkdir()
    (data_dir / "issues_train.tsv").write_text("\n".join(_issue_lines(slice(0, 6))) + "\n", encoding="utf-8")
    (data_dir / "issues_test.tsv").write_text("\n".join(_issue_lines(slice(6, 8))) + "\n", encoding="utf-8")
    return data_dir


@pytest.fixture
def issues_train(issues_dir: Path) -> pd.DataFrame:
    """Training issues as a typed frame."""
    return load_dataset(issues_dir / "issues_train.tsv", GitHubIssue.SCHEMA, has_header=True)


@pytest.fixture
def issues_test(issues_dir: Path) -> pd.DataFrame:
    """Held-out issues as a typed frame."""
    return load_dataset(issues_dir / "issues_test.tsv", GitHubIssue.SCHEMA, has_header=True)


@pytest.fixture
def diagnosis_file(tmp_path: Path) -> Path:
    """Medical record pages labelled by whether they state a diagnosis."""
    positive = [
        "Diagnosis: acute bronchitis, prescribed antibiotics",
        "Assessment confirms type 2 diabetes, diagnosis recorded",
        "Final diagnosis hypertension stage one",
        "Diagnosed with migraine without aura",
        "Clinical diagnosis of community acquired pneumonia",
        "Diagnosis of iron deficiency anemia confirmed by labs",
        "Patient diagnosed with asthma, inhaler started",
        "Diagnosis: sprained ankle grade two",
        "Working diagnosis gastroenteritis, fluids advised",
        "Diagnosed with seasonal allergic rhinitis",
    ]
    negative = [
        "Patient address and phone number updated",
        "Insurance card scanned and verified",
        "Appointment rescheduled to next Tuesday",
        "Billing statement mailed to guarantor",
        "Consent form signed at front desk",
        "Emergency contact information on file",
        "Referral letter received from clinic",
        "Pharmacy preference changed to downtown branch",
        "Visitor log for room twelve",
        "Parking validation issued to family",
    ]
    lines = [f"{text}\t1" for text in positive] + [f"{text}\t0" for text in negative]
    path = tmp_path / "APS_Pages.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
