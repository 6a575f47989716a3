import click
import sys

from importlib.metadata import version
from .fragHelp import *
from .fragProjectClass import *
from .fragments import *
from .samDump import alignment_lines, ENGINES
from .barcode.barcodeCount import count_barcodes, read_barcode_map, write_barcode_quants
from .barcode.kneeFilter import *

DEFAULT_FILES = ("aligned.bam", "R2.fastq.gz", "fragments.tsv")

@click.command()
@click.version_option(package_name='chromfrag')

@click.argument('files', nargs=-1, type=click.Path())

@click.option('--ncells', '-nc', default = DEFAULT_NCELLS, help='Number of cells expected; the knee cutoff keeps roughly this many of the most frequent barcodes.')
@click.option('--barcode-whitelist', '-w', default = "", help='File of barcodes (one per line) to keep instead of performing the knee call.')
@click.option('--reverse-complement', '-rc', is_flag=True, help='Perform the reverse complement of the barcode reads - useful for some 10X index reads.')

@click.option('--engine', default = "samtools", type=click.Choice(ENGINES), help='How to stream the .bam file as text; `samtools view` or pysam in-process.')
@click.option('--samtools-path', default = "", help='Path to samtools; by default, assumes that samtools is in PATH')
@click.option('--progress-interval', default = PROGRESS_INTERVAL, help='Report progress every this many alignment records (0 to disable).')
@click.option('--no-qc-files', is_flag=True, help='Do not write the parameter, barcode quant and summary files next to the output.')

def main(files, ncells, barcode_whitelist, reverse_complement,
	engine, samtools_path, progress_interval, no_qc_files):

	"""
	chromfrag: Generate a fragments .tsv from an aligned .bam and the barcode read .fastq \n

	FILES = aligned.bam  the_R2.fastq.gz  out_fragments.tsv \n
	Compress the output with `bgzip` and index with `tabix -p bed` afterwards.
	"""

	__version__ = version('chromfrag')
	click.echo(gettime() + "Starting chromfrag v%s" % __version__)

	if(len(files) == 3):
		bamfile, bcfile, output = files
	else:
		click.echo("Arguments: aligned.bam  the_R2.fastq.gz  out_fragments.tsv")
		bamfile, bcfile, output = DEFAULT_FILES

	# Verify inputs and set up an object to hold the run configuration
	p = fragProject(bamfile, bcfile, output, ncells,
		barcode_whitelist, reverse_complement,
		engine, samtools_path, progress_interval, no_qc_files)

	if(p.qc_files):
		p.dump_parameters()

	#-----------------------------------
	# Step 1 - Count reads per barcode
	#-----------------------------------
	click.echo(gettime() + "Counting barcodes in " + p.bcfile)
	try:
		with open_text(p.bcfile) as f:
			bccount = count_barcodes(f, p.reverse_complement)
	except (IOError, EOFError, UnicodeDecodeError) as err:
		sys.exit(gettime() + "ERROR: failed while counting barcodes in {0}: {1}".format(p.bcfile, err))
	click.echo(gettime() + "Found " + str(len(bccount)) + " distinct barcodes.")

	#-----------------------------------
	# Step 2 - Nominate cell barcodes
	#-----------------------------------
	click.echo(gettime() + "Filtering barcodes")
	if(p.barcode_whitelist != ""):
		try:
			whitelist = read_whitelist(p.barcode_whitelist)
		except (IOError, EOFError, UnicodeDecodeError) as err:
			sys.exit(gettime() + "ERROR: failed while reading the barcode whitelist {0}: {1}".format(p.barcode_whitelist, err))
		keepbc = filter_whitelist(bccount, whitelist)
		cutoff = "predetermined"
	else:
		cutoff = knee_cutoff(bccount.values(), p.ncells)
		keepbc = filter_min_count(bccount, p.ncells, cutoff)
	click.echo(gettime() + "Retained " + str(len(keepbc)) + " barcodes.")

	if(p.qc_files):
		write_barcode_quants(bccount, p.qc_file("barcodequants.csv"))
		write_knee_params(p.qc_file("kneeParams.csv"), cutoff, len(keepbc))

	#-----------------------------------
	# Step 3 - Read name to barcode map
	#-----------------------------------
	click.echo(gettime() + "Constructing read-to-barcode map")
	try:
		with open_text(p.bcfile) as f:
			readbcmap = read_barcode_map(f, keepbc, p.reverse_complement)
	except (IOError, EOFError, UnicodeDecodeError) as err:
		sys.exit(gettime() + "ERROR: failed while mapping reads to barcodes in {0}: {1}".format(p.bcfile, err))
	click.echo(gettime() + "Number of reads in map: " + str(len(readbcmap)))

	#-----------------------------------
	# Step 4 - Stream the .bam to fragments
	#-----------------------------------
	click.echo(gettime() + "Generating fragment file")
	try:
		with open_text(p.output, 'wt') as out:
			lines = alignment_lines(p.bamfile, p.engine, p.samtools)
			stats = generate_fragments(lines, readbcmap, out, p.progress_interval)
	except IndexError as err:
		sys.exit(gettime() + "ERROR: malformed alignment while generating fragments from {0}: {1}".format(p.bamfile, err))
	except (IOError, UnicodeDecodeError, ValueError) as err:
		sys.exit(gettime() + "ERROR: failed while generating fragments from {0} into {1}: {2}".format(p.bamfile, p.output, err))

	if(p.qc_files):
		write_sumstats(p.qc_file("sumstats.log"), p.bamfile, len(readbcmap), stats)

	click.echo(gettime() + "Complete.")
