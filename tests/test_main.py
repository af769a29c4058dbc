import pytest

from m3u8_fetcher import main as cli

from conftest import BASE

ENV_VARS = ["M3U8_URL", "M3U8_DOMAIN", "OUTPUT_DIR", "FILE_NAME", "SUFFIX", "HTTP_TIMEOUT", "VERBOSE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_client(monkeypatch, make_client):
    client = make_client(
        {
            f"{BASE}/index.m3u8": "#EXTM3U\n#EXT-X-VERSION:3\na.ts\nb.ts\n",
            f"{BASE}/a.ts": b"aa",
            f"{BASE}/b.ts": b"bb",
        }
    )
    timeouts = []

    def factory(timeout):
        timeouts.append(timeout)
        return client

    monkeypatch.setattr(cli, "HttpClient", factory)
    client.timeouts = timeouts
    return client


def test_defaults():
    args = cli.parse_args(["-m", f"{BASE}/index.m3u8", "-d", BASE])

    assert args.output_dir == "."
    assert args.file_name == "index"
    assert args.suffix == ".ts"
    assert args.timeout == 30
    assert args.verbose is False


def test_environment_supplies_defaults(monkeypatch):
    monkeypatch.setenv("M3U8_URL", "https://cdn.example.com/a.m3u8")
    monkeypatch.setenv("M3U8_DOMAIN", "https://cdn.example.com")
    monkeypatch.setenv("FILE_NAME", "movie")
    monkeypatch.setenv("SUFFIX", ".aac")
    monkeypatch.setenv("HTTP_TIMEOUT", "12")
    monkeypatch.setenv("VERBOSE", "yes")

    args = cli.parse_args([])

    assert args.m3u8_url == "https://cdn.example.com/a.m3u8"
    assert args.domain == "https://cdn.example.com"
    assert args.file_name == "movie"
    assert args.suffix == ".aac"
    assert args.timeout == 12
    assert args.verbose is True


def test_missing_required_options_exit_with_usage_code():
    assert cli.main(["-m", f"{BASE}/index.m3u8"]) == cli.EXIT_USAGE


def test_successful_run(fake_client, tmp_path):
    status = cli.main(["-m", f"{BASE}/index.m3u8", "-d", BASE, "-l", str(tmp_path), "-f", "out", "--timeout", "7"])

    assert status == cli.EXIT_OK
    assert (tmp_path / "out.ts").read_bytes() == b"aabb"
    assert fake_client.timeouts == [7]
    assert fake_client.closed


def test_failed_run_exits_with_failure_code(fake_client, tmp_path):
    fake_client.failing.add(f"{BASE}/b.ts")

    status = cli.main(["-m", f"{BASE}/index.m3u8", "-d", BASE, "-l", str(tmp_path)])

    assert status == cli.EXIT_FAILURE
    assert (tmp_path / "index.ts").read_bytes() == b"aa"
    assert fake_client.closed


def test_empty_suffix_exits_with_usage_code(fake_client, tmp_path):
    status = cli.main(["-m", f"{BASE}/index.m3u8", "-d", BASE, "-l", str(tmp_path), "-s", ""])

    assert status == cli.EXIT_USAGE
    assert fake_client.requested == []
