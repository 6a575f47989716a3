import os
import sys
from ruamel.yaml import YAML
from .fragHelp import *
from .samDump import ENGINES

class fragProject():
	def __init__(self, bamfile, bcfile, output, ncells,
		barcode_whitelist, reverse_complement,
		engine, samtools_path, progress_interval, no_qc_files):

		#----------------------------------
		# Assign straightforward attributes
		#----------------------------------
		self.bamfile = bamfile
		self.bcfile = bcfile
		self.output = output
		self.ncells = ncells
		self.reverse_complement = reverse_complement
		self.engine = engine
		self.progress_interval = progress_interval
		self.qc_files = not no_qc_files

		filename = os.path.basename(output)
		if filename.endswith(".gz"):
			filename = filename[:-3]
		self.name = os.path.splitext(filename)[0]

		if(ncells < 1):
			sys.exit("ERROR: --ncells must be a positive number of cells; QUITTING")
		if(progress_interval < 0):
			sys.exit("ERROR: --progress-interval cannot be negative; QUITTING")
		if(engine not in ENGINES):
			sys.exit("ERROR: unknown --engine %s; choose from %s" % (engine, ", ".join(ENGINES)))

		#------------------------------
		# Make sure all files are valid
		#------------------------------
		if(not os.path.exists(bamfile)):
			sys.exit(gettime() + "Cannot find the supplied .bam file: %s" % bamfile)
		verify_file(bcfile)

		self.barcode_whitelist = barcode_whitelist
		if(barcode_whitelist != ""):
			if(os.path.isfile(barcode_whitelist)):
				verify_file(barcode_whitelist)
			else:
				sys.exit("Could not find the barcode whitelist file: %s" % barcode_whitelist)

		outdir = os.path.dirname(os.path.abspath(output))
		if(not os.path.isdir(outdir)):
			sys.exit("Could not find the output directory: %s" % outdir)

		# Only the samtools engine needs the executable
		if(engine == "samtools"):
			self.samtools = get_software_path('samtools', samtools_path)
		else:
			self.samtools = "NA"

	def qc_file(self, suffix):
		return(sidecar_name(self.output, suffix))

	def dump_parameters(self):
		'''
		Round trip the run configuration to .yaml
		'''
		y_s = self.qc_file("parameters.yaml")
		yaml = YAML()
		yaml.default_flow_style = False
		with open(y_s, 'w') as yaml_file:
			yaml.dump(dict(self), yaml_file)
		return(y_s)

	#--------------------------------------------------------------------------------
	# Define a method to dump the object as a .yaml/dictionary for use in other files
	#--------------------------------------------------------------------------------
	def __iter__(self):

		yield 'bamfile', self.bamfile
		yield 'bcfile', self.bcfile
		yield 'output', self.output
		yield 'name', self.name

		yield 'ncells', self.ncells
		yield 'barcode_whitelist', self.barcode_whitelist
		yield 'reverse_complement', self.reverse_complement

		yield 'engine', self.engine
		yield 'samtools', self.samtools
		yield 'progress_interval', self.progress_interval
		yield 'qc_files', self.qc_files
