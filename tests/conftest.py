import gzip
import stat

import pytest


def fastq_text(records):
	'''
	records: list of (read id, barcode); ids get a comment after a space
	like the Illumina convention
	'''
	out = ""
	for rid, bc in records:
		out += "@" + rid + " 2:N:0:1\n" + bc + "\n+\n" + "F" * len(bc) + "\n"
	return(out)


def sam_line(readname, chrom, pos, tlen, flag = "99"):
	return("\t".join([readname, flag, chrom, str(pos), "60", "50M", "=", "1000", str(tlen),
		"ACGT", "FFFF", "CB:Z:ignored"]) + "\n")


@pytest.fixture
def write_fastq(tmp_path):
	def _write(records, name = "R2.fastq.gz"):
		path = tmp_path / name
		if name.endswith(".gz"):
			with gzip.open(path, "wt") as fh:
				fh.write(fastq_text(records))
		else:
			path.write_text(fastq_text(records))
		return(str(path))
	return(_write)


@pytest.fixture
def fake_samtools(tmp_path):
	'''
	Executable standing in for samtools: `view FILE` prints FILE, which the
	tests fill with SAM text. Exits non-zero when FILE is missing.
	'''
	path = tmp_path / "samtools"
	path.write_text("#!/bin/sh\n"
		"if [ ! -f \"$2\" ]; then echo \"[main_samview] fail to open $2\" >&2; exit 1; fi\n"
		"cat \"$2\"\n")
	path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
	return(str(path))


@pytest.fixture
def make_tool(tmp_path):
	'''
	Write an executable shell script standing in for an external tool
	'''
	def _make(name, body):
		path = tmp_path / name
		path.write_text("#!/bin/sh\n" + body)
		path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
		return(str(path))
	return(_make)
