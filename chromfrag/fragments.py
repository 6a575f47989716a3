import re
import click
from .fragHelp import *

# Columns of a SAM text line used to build a fragment
READNAME_FIELD = 0
CHROM_FIELD = 2
POS_FIELD = 3
TLEN_FIELD = 8

PROGRESS_INTERVAL = 1000000

# Optional sign and ASCII digits only; no spaces or underscores
INTEGER = re.compile(r"[+-]?[0-9]+")

class FragmentStats():
	'''
	Counters accumulated over one pass of the fragment generator.
	Every line read ends up in exactly one of emitted, ignored,
	deduplicated or missing.
	'''
	def __init__(self):
		self.lines = 0
		self.emitted = 0
		self.ignored = 0
		self.deduplicated = 0
		self.missing = 0

	def summary(self):
		return("total records read: " + str(self.lines) + " ignored:" + str(self.ignored) + " dedup:" + str(self.deduplicated))

	def __iter__(self):
		yield 'lines', self.lines
		yield 'emitted', self.emitted
		yield 'ignored', self.ignored
		yield 'deduplicated', self.deduplicated
		yield 'missing', self.missing

def split_alignment(line, lineno):
	'''
	Pull out read name, chromosome, position and template length.
	A line without enough columns cannot be recovered from.
	'''
	parts = line.rstrip("\r\n").split("\t")
	if(len(parts) <= TLEN_FIELD):
		raise IndexError("alignment record %d has %d tab-delimited fields; at least %d are required" % (lineno, len(parts), TLEN_FIELD + 1))
	return(parts[READNAME_FIELD], parts[CHROM_FIELD], parts[POS_FIELD], parts[TLEN_FIELD])

def parse_int(field):
	'''
	Integer value of a SAM column, or None when it is not a plain integer
	'''
	if(INTEGER.fullmatch(field) is None):
		return(None)
	return(int(field))

def generate_fragments(lines, readbcmap, out, progress_interval = PROGRESS_INTERVAL):
	'''
	Write one fragment per read whose barcode is known, skipping a read
	when its barcode last emitted a fragment at the same start position.
	Only the most recent position per barcode is remembered, so the
	input order matters.
	'''
	stats = FragmentStats()
	lastPosForBC = dict()

	for line in lines:
		stats.lines += 1
		if(progress_interval > 0 and stats.lines % progress_interval == 0):
			click.echo(gettime() + "records so far: " + str(stats.lines))

		readname, read_chr, read_from, read_tlen = split_alignment(line, stats.lines)

		cb = readbcmap.get("@" + readname)
		if(cb is None):
			stats.missing += 1
			continue

		start = parse_int(read_from)
		tlen = parse_int(read_tlen)
		if(start is None or tlen is None):
			stats.ignored += 1
			continue

		lastpos = lastPosForBC.get(cb)
		if(lastpos is None or lastpos != start):
			out.write(read_chr + "\t" + str(start) + "\t" + str(start + tlen) + "\t" + cb + "\t1\n")
			lastPosForBC[cb] = start
			stats.emitted += 1
		else:
			stats.deduplicated += 1

	click.echo(gettime() + stats.summary())
	return(stats)

def write_sumstats(filename, bamfile, nreads_map, stats):
	with open(filename, 'w') as logfile:
		logfile.write("\nGenerating fragments from:\n" + bamfile + "\n")
		logfile.write("\nNumber of reads in map: " + str(nreads_map) + "\n")
		logfile.write("Total records read: " + str(stats.lines) + "\n")
		logfile.write("Fragments written: " + str(stats.emitted) + "\n")
		logfile.write("Ignored (unparseable position): " + str(stats.ignored) + "\n")
		logfile.write("Deduplicated: " + str(stats.deduplicated) + "\n")
		logfile.write("Missing barcode: " + str(stats.missing) + "\n\n")
	return(filename)
