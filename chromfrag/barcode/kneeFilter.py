import click
from ..fragHelp import *

# Number of cells the knee call aims for
DEFAULT_NCELLS = 8000

def knee_cutoff(counts, ncells):
	'''
	Minimum count such that roughly the `ncells` most frequent barcodes pass.
	Ties at the cutoff all pass. Returns None when there are no counts.
	'''
	if(ncells < 1):
		raise ValueError("number of cells must be positive, got %d" % ncells)
	countlist = sorted(counts)
	if(len(countlist) == 0):
		return(None)
	if(len(countlist) < ncells):
		return(countlist[0])
	return(countlist[len(countlist) - ncells])

def filter_min_count(bccount, ncells, cutoff = None):
	'''
	Keep every barcode observed at least as often as the knee cutoff.
	The barcode(s) with the highest count are echoed for the operator.
	A cutoff already computed by knee_cutoff can be passed in.
	'''
	if(cutoff is None):
		cutoff = knee_cutoff(bccount.values(), ncells)
	if(cutoff is None):
		click.echo(gettime() + "No barcodes observed; nothing to filter.")
		return(dict())

	maxcount = max(bccount.values())
	click.echo(gettime() + "Max count for a bc: " + str(maxcount))

	keepbc = dict()
	for bc in sorted(bccount):
		cnt = bccount[bc]
		if(cnt >= cutoff):
			keepbc[bc] = cnt
		if(cnt == maxcount):
			click.echo(bc)
	click.echo("------")
	return(keepbc)

def read_whitelist(filename):
	'''
	One barcode per line; blank lines are skipped
	'''
	with open_text(filename) as wl:
		barcodes = [line.strip() for line in wl]
	return(set([bc for bc in barcodes if bc != ""]))

def filter_whitelist(bccount, whitelist):
	'''
	Predetermined barcodes rather than a knee call
	'''
	return({bc : bccount[bc] for bc in sorted(bccount) if bc in whitelist})

def write_knee_params(filename, cutoff, nretained):
	'''
	Record how the barcodes were nominated; cutoff is a count,
	"predetermined" for a whitelist, or None when nothing was tallied
	'''
	if(cutoff is None):
		cutoff = "NA"
	with open(filename, 'w') as paramsFile:
		paramsFile.write("bead_threshold," + str(cutoff) + "\n")
		paramsFile.write("retained_barcodes," + str(nretained) + "\n")
	return(filename)
