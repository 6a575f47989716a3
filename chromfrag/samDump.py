import pysam
import tempfile
from subprocess import Popen, PIPE

ENGINES = ['samtools', 'pysam']

def samtools_view_lines(bamfile, samtools_path = "samtools"):
	'''
	Stream `samtools view` of a .bam file one SAM text line at a time.
	stderr is spooled to a temporary file so samtools never blocks on it.
	A non-zero exit status of samtools raises IOError once the stream ends.
	'''
	with tempfile.TemporaryFile(mode='w+') as errfile:
		p = Popen([samtools_path, 'view', bamfile], stdout=PIPE, stderr=errfile,
			universal_newlines=True)
		try:
			for line in p.stdout:
				yield(line)
		finally:
			p.stdout.close()
			rc = p.wait()
		errfile.seek(0)
		err = errfile.read()
	if(rc != 0):
		raise IOError("samtools view exited with status %d: %s" % (rc, err.strip()))

def pysam_view_lines(bamfile):
	'''
	Same SAM text as `samtools view`, produced in-process with pysam
	'''
	with pysam.AlignmentFile(bamfile, "rb") as bam:
		for read in bam:
			yield(read.to_string() + "\n")

def alignment_lines(bamfile, engine = "samtools", samtools_path = "samtools"):
	if(engine == "samtools"):
		return(samtools_view_lines(bamfile, samtools_path))
	elif(engine == "pysam"):
		return(pysam_view_lines(bamfile))
	raise ValueError("Unknown alignment engine %s; choose from %s" % (engine, ", ".join(ENGINES)))
