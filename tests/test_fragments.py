import io

import pytest

from chromfrag.fragments import generate_fragments, split_alignment, write_sumstats, FragmentStats
from conftest import sam_line


def run(lines, readbcmap, **kwargs):
	out = io.StringIO()
	stats = generate_fragments(lines, readbcmap, out, **kwargs)
	return(out.getvalue(), stats)


def test_split_alignment_fields():
	line = sam_line("read1", "chr1", 9996, 232)
	assert split_alignment(line, 1) == ("read1", "chr1", "9996", "232")


def test_split_alignment_short_line_is_fatal():
	with pytest.raises(IndexError, match="record 4"):
		split_alignment("read1\t99\tchr1\t100\n", 4)


def test_duplicates_collapse_to_one_fragment():
	lines = [sam_line("r%d" % i, "chr1", pos, 50) for i, pos in enumerate([100, 100, 100, 205])]
	readbcmap = {"@r%d" % i: "X-1" for i in range(4)}
	text, stats = run(lines, readbcmap)
	assert text == "chr1\t100\t150\tX-1\t1\nchr1\t205\t255\tX-1\t1\n"
	assert stats.deduplicated == 2
	assert stats.emitted == 2


def test_dedup_only_against_last_emission():
	# 100 again after 205 is a new fragment for the barcode
	lines = [sam_line("r%d" % i, "chr1", pos, 10) for i, pos in enumerate([100, 205, 100])]
	readbcmap = {"@r%d" % i: "X-1" for i in range(3)}
	text, stats = run(lines, readbcmap)
	assert text.count("\n") == 3
	assert stats.deduplicated == 0


def test_dedup_is_per_barcode():
	lines = [sam_line("r1", "chr1", 100, 10), sam_line("r2", "chr1", 100, 10), sam_line("r3", "chr1", 100, 10)]
	readbcmap = {"@r1": "A", "@r2": "B", "@r3": "A"}
	text, stats = run(lines, readbcmap)
	assert text == "chr1\t100\t110\tA\t1\nchr1\t100\t110\tB\t1\n"
	assert stats.deduplicated == 1


def test_negative_template_length():
	text, stats = run([sam_line("r1", "chr2", 500, -120)], {"@r1": "A"})
	assert text == "chr2\t500\t380\tA\t1\n"


def test_unparseable_position_is_ignored_not_fatal():
	lines = [sam_line("r1", "chr1", "NA", 50), sam_line("r2", "chr1", 300, 50)]
	text, stats = run(lines, {"@r1": "A", "@r2": "A"})
	assert text == "chr1\t300\t350\tA\t1\n"
	assert stats.ignored == 1


def test_unparseable_template_length_is_ignored():
	text, stats = run([sam_line("r1", "chr1", 10, "*")], {"@r1": "A"})
	assert text == ""
	assert stats.ignored == 1


def test_missing_barcode_is_skipped_silently(capsys):
	text, stats = run([sam_line("r1", "chr1", 10, 5), sam_line("r2", "chr1", 20, 5)], {"@r2": "A"})
	assert text == "chr1\t20\t25\tA\t1\n"
	assert stats.missing == 1
	summary = capsys.readouterr().out
	assert "total records read: 2 ignored:0 dedup:0" in summary
	assert "missing" not in summary


def test_short_line_aborts_the_pass():
	lines = [sam_line("r1", "chr1", 10, 5), "r2\t99\tchr1\n"]
	with pytest.raises(IndexError):
		run(lines, {"@r1": "A"})


def test_conservation_of_lines():
	lines = [
		sam_line("r1", "chr1", 10, 5),
		sam_line("r2", "chr1", 10, 5),
		sam_line("r3", "chr1", "x", 5),
		sam_line("r4", "chr1", 30, 5),
		sam_line("r5", "chr1", 40, 5),
	]
	readbcmap = {"@r1": "A", "@r2": "A", "@r3": "A", "@r5": "B"}
	text, stats = run(lines, readbcmap)
	assert stats.lines == 5
	assert stats.lines == stats.emitted + stats.ignored + stats.deduplicated + stats.missing
	assert dict(stats) == {"lines": 5, "emitted": 2, "ignored": 1, "deduplicated": 1, "missing": 1}


def test_output_is_deterministic():
	lines = [sam_line("r%d" % i, "chr%d" % (i % 3), 100 + (i % 4) * 7, 40) for i in range(30)]
	readbcmap = {"@r%d" % i: "bc%d" % (i % 5) for i in range(30)}
	assert run(lines, readbcmap)[0] == run(lines, readbcmap)[0]


def test_progress_is_reported(capsys):
	lines = [sam_line("r%d" % i, "chr1", i, 5) for i in range(5)]
	run(lines, {}, progress_interval = 2)
	out = capsys.readouterr().out
	assert "records so far: 2" in out
	assert "records so far: 4" in out
	assert "records so far: 5" not in out


def test_write_sumstats(tmp_path):
	stats = FragmentStats()
	stats.lines = 4
	stats.emitted = 2
	stats.missing = 2
	out = tmp_path / "frag.sumstats.log"
	write_sumstats(str(out), "aligned.bam", 10, stats)
	text = out.read_text()
	assert "Number of reads in map: 10" in text
	assert "Missing barcode: 2" in text


def test_only_plain_integers_are_parsed():
	lines = [
		sam_line("r1", "chr1", "1_000", 5),
		sam_line("r2", "chr1", " 200", 5),
		sam_line("r3", "chr1", 300, "5 "),
		sam_line("r4", "chr1", "+400", "-5"),
	]
	readbcmap = {"@r1": "A", "@r2": "A", "@r3": "A", "@r4": "A"}
	text, stats = run(lines, readbcmap)
	assert text == "chr1\t400\t395\tA\t1\n"
	assert stats.ignored == 3
