from collections import Counter
from Bio.Seq import Seq

def fastq_records(lines):
	"""
	Yields (identifier, sequence) for every 4-line record.
	The separator and quality lines are read positionally and never checked;
	a trailing record without a sequence line is dropped.
	"""
	it = iter(lines)
	for title in it:
		sequence = next(it, None)
		if sequence is None:
			break
		next(it, None)
		next(it, None)
		yield(title.rstrip("\r\n"), sequence.rstrip("\r\n"))

def read_name(title):
	'''
	Read identifier is the identifier line up to the first space
	'''
	idx = title.find(" ")
	if(idx == -1):
		return(title)
	return(title[0:idx])

def rev_comp(seq):
	return(str(Seq(seq).reverse_complement()))

def count_barcodes(lines, reverse_complement = False):
	'''
	Tally the number of reads observed per barcode
	'''
	bccount = Counter()
	for title, bc in fastq_records(lines):
		if(reverse_complement):
			bc = rev_comp(bc)
		bccount[bc] += 1
	return(bccount)

def read_barcode_map(lines, keep, reverse_complement = False):
	'''
	Map read names (with their leading @) to barcodes, keeping only reads
	whose barcode is in `keep`. Every value that uses the same barcode is the
	same string object.
	'''
	pool = dict()
	readbcmap = dict()
	for title, bc in fastq_records(lines):
		if(reverse_complement):
			bc = rev_comp(bc)
		if(bc in keep):
			bc = pool.setdefault(bc, bc)
			readbcmap[read_name(title)] = bc
	return(readbcmap)

def write_barcode_quants(bccount, filename):
	'''
	Write barcode,count for every barcode; highest counts first
	'''
	ordered = sorted(bccount.items(), key = lambda kv: (-kv[1], kv[0]))
	with open(filename, 'w') as quants_handler:
		for (k, v) in ordered:
			quants_handler.write(str(k) + "," + str(v) + "\n")
	return(filename)
