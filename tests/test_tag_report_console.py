import pytest

from tag_stats.adapter.input.console.tag_report_console import (
    main,
    prompt_backend,
    prompt_countries,
    render_ranking,
)
from tag_stats.domain.tag_ranking import TagRanking

from conftest import trending_row, write_trending_csv


def scripted(answers):
    answers = iter(answers)
    prompts: list[str] = []

    def input_fn(prompt: str) -> str:
        prompts.append(prompt)
        return next(answers)

    return input_fn, prompts


@pytest.fixture
def data_dir(tmp_path):
    write_trending_csv(
        tmp_path / "USvideos.csv",
        [
            trending_row(video_id="u1", tags="cats|funny", views="1000"),
            trending_row(video_id="u2", tags="cats|news", views="400"),
        ],
    )
    write_trending_csv(tmp_path / "GBvideos.csv", [trending_row(video_id="g1", tags="tea|café", views="300")])
    return tmp_path


def test_prompt_backend_reprompts_until_valid():
    input_fn, prompts = scripted(["heap", "BST"])
    assert prompt_backend(input_fn) == "tree"
    assert prompts == [
        "Choose a data structure for parsing (map or bst): ",
        "Please choose a valid data structure (map or bst): ",
    ]


def test_prompt_countries_reprompts_on_invalid_code():
    input_fn, prompts = scripted(["US, XX", "gb"])
    output: list[str] = []

    assert prompt_countries(["US", "GB"], input_fn, output.append) == ["GB"]
    assert output == ["Invalid country code: XX"]
    assert len(prompts) == 2


def test_render_ranking_formats_interaction_values():
    ranking = TagRanking(
        scope="country",
        country="US",
        metric="interaction",
        direction="bottom",
        limit=25,
        entries=[("news", 17.0), ("cats", 152.00000000000003)],
    )
    assert render_ranking(ranking) == [
        "Top 25 keywords/tags to avoid for positive interaction:",
        "news: 17.00",
        "cats: 152.00",
    ]


@pytest.mark.parametrize("backend", ["map", "bst"])
def test_main_prints_report(data_dir, backend):
    output: list[str] = []

    code = main(
        ["--data-dir", str(data_dir), "--backend", backend, "--countries", "US", "--limit", "2"],
        input_fn=lambda prompt: pytest.fail("should not prompt"),
        output_fn=output.append,
    )

    assert code == 0
    assert output[0].startswith("Time taken to parse data using ")
    assert output[1] == "Available countries: GB US"
    report = output[2]
    assert "Country: US" in report
    assert "Top 2 keywords/tags for views:\ncats: 1400\nfunny: 1000" in report
    assert "Top 2 keywords/tags to avoid for views:\nnews: 400\nfunny: 1000" in report
    assert "Global top 2 keywords/tags for views:\ncats: 1400\nfunny: 1000" in report


def test_main_prompts_for_backend_and_countries(data_dir):
    input_fn, prompts = scripted(["map", "fr", "GB"])
    output: list[str] = []

    code = main(["--data-dir", str(data_dir), "--interactive-backend"], input_fn=input_fn, output_fn=output.append)

    assert code == 0
    assert "Invalid country code: fr" in output
    assert "Country: GB" in output[-1]
    assert "café" not in output[-1]
    assert len(prompts) == 3


def test_main_rejects_invalid_countries_argument(data_dir):
    output: list[str] = []
    code = main(["--data-dir", str(data_dir), "--countries", "ZZ"], output_fn=output.append)
    assert code == 2
    assert output[-1] == "Invalid country code: ZZ"


def test_main_rejects_unknown_backend(data_dir):
    output: list[str] = []
    assert main(["--data-dir", str(data_dir), "--backend", "heap"], output_fn=output.append) == 2


def test_main_without_data(tmp_path):
    output: list[str] = []
    assert main(["--data-dir", str(tmp_path)], output_fn=output.append) == 1
    assert main(["--data-dir", str(tmp_path / "missing")], output_fn=output.append) == 1


@pytest.mark.parametrize("limit", ["-1", "0", "many"])
def test_main_rejects_invalid_limit(data_dir, limit):
    with pytest.raises(SystemExit) as exc_info:
        main(["--data-dir", str(data_dir), "--countries", "US", "--limit", limit], output_fn=lambda line: None)
    assert exc_info.value.code == 2
