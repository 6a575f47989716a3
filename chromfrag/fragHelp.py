import time
import shutil
import os
import sys
import gzip

def gettime():
	'''
	Matches `date` in unix
	'''
	return(time.strftime("%a ") + time.strftime("%b ") + time.strftime("%d ") + time.strftime("%X ") +
		time.strftime("%Z ") + time.strftime("%Y")+ ": ")

def open_text(filename, mode = 'rt'):
	"""
	Open a plain or gzip-compressed text file based on its extension
	"""
	if filename.split('.')[-1] == "gz":
		return(gzip.open(filename, mode))
	return(open(filename, mode[0]))

def verify_file(filename):
	"""
	Ensure that file can both be read and exists
	"""
	try:
		fp = open_text(filename)
		one = fp.readline()
		fp.close()
	except (IOError, EOFError) as err:
		sys.exit(gettime() + "Error reading the file {0}: {1}".format(filename, err))
	return(filename)

def get_software_path(tool, abs_path):
	'''
	Function takes a tool name and a possible absolute path
	specified by the user input and returns the absolute path
	to the tool
	'''
	tool_path = shutil.which(tool)
	if(abs_path != ""):
		if(os.path.isfile(abs_path)):
			tool_path = abs_path
		else:
			sys.exit("ERROR: cannot find "+tool+" at the supplied path: "+abs_path)
	if(tool_path is None):
		sys.exit("ERROR: cannot find "+tool+" in environment; add it to user PATH environment or specify executable using a flag.")
	return(tool_path)

def sidecar_name(output, suffix):
	"""
	Name of a QC file written next to the fragment file
	"""
	return(output + "." + suffix)
