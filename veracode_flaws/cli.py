# -*- coding: utf-8 -*-

"""
Export the open flaws of every Veracode application to one CSV file.

PROCESS: app list -> build list of each app -> detailed report of the most
recent build that has results -> filter flaws -> one CSV row per flaw.
"""

import csv
import sys
import logging
import argparse
import datetime

from veracode_flaws.api import XMLAPI, VeracodeAPIError
from veracode_flaws.config import ConfigError, Settings, load_credentials, output_path
from veracode_flaws.report import FlawReportWriter, MissingCustomFieldError, first_custom_field, project_row
from veracode_flaws.selector import select_build

logger = logging.getLogger('Start API Veracode XML')


class RunSummary:
	def __init__(self, output_file=None):
		self.output_file = output_file
		self.apps_total = 0
		self.apps_with_results = 0
		self.apps_skipped = 0
		self.rows_written = 0


def configure_logging(debug=False):
	logging.basicConfig(
			level=logging.DEBUG if debug else logging.INFO,
			format='%(asctime)s.%(msecs)03d %(levelname)s %(module)s - %(funcName)s: %(message)s',
			datefmt='%Y-%m-%d %H:%M:%S',
	)


def parse_args(argv=None):
	parser = argparse.ArgumentParser(description='Export Veracode flaws of every application to a CSV file.')
	parser.add_argument('-credsFile', '--credsFile', help='Credentials file path (YAML).',
						action='store', dest='creds_file', default='')
	parser.add_argument('-nonpv', '--nonpv', help='Includes non-policy-violating flaws.',
						action='store_true', dest='nonpv')
	parser.add_argument('-mitigated', '--mitigated', help='Includes mitigated flaws.',
						action='store_true', dest='mitigated')
	parser.add_argument('-static', '--static', help='Only exports static flaws.',
						action='store_true', dest='static')
	parser.add_argument('-dynamic', '--dynamic', help='Only exports dynamic flaws.',
						action='store_true', dest='dynamic')
	parser.add_argument('-desc', '--desc', help='Includes detailed flaw descriptions (larger file size).',
						action='store_true', dest='desc')
	parser.add_argument('-outputFileName', '--outputFileName',
						help='Name of the output file. Default is based on a timestamp. '
						'Providing this parameter will overwrite the file each run.',
						action='store', dest='output_file_name', default='default')
	parser.add_argument('-failOnWriteError', '--failOnWriteError', help='Stop when a CSV row cannot be written.',
						action='store_true', dest='fail_on_write_error')
	parser.add_argument('-debug', '--debug', help='Debug logging.',
						action='store_true', dest='debug')
	return parser.parse_args(argv)


def run(api, settings, out=None):
	"""
	Walk the account's apps and write the report. VeracodeAPIError from the
	app or build lists and OSError from the output file are left to the
	caller.
	"""
	if out is None:
		out = sys.stdout

	flaw_filter = settings.flaw_filter()

	applist = api.getapplist()

	summary = RunSummary(output_file=output_path(settings.output_file_name))
	logger.info('Writing flaws to {0}.'.format(summary.output_file))

	with open(summary.output_file, 'w', newline='', encoding='utf-8') as csvfile:
		writer = FlawReportWriter(
			csvfile=csvfile,
			include_description=settings.include_description,
			fail_on_write_error=settings.fail_on_write_error,
		)

		for counter, app in enumerate(applist, start=1):
			summary.apps_total += 1
			print('Processing App ID {0}: {1} ({2} of {3})'.format(
				app.app_id, app.app_name, counter, len(applist)), file=out)

			builds = api.getbuildlist(app_id=app.app_id)
			if not builds:
				logger.info('The app {0} has no build.'.format(app.app_name))
				summary.apps_skipped += 1
				continue

			selection = select_build(api, builds)
			if selection is None:
				logger.info('No results available for app {0}.'.format(app.app_name))
				summary.apps_skipped += 1
				continue

			flaws = list(flaw_filter.apply(selection.flaws))
			if not flaws:
				summary.apps_with_results += 1
				continue

			try:
				custom_field = first_custom_field(app, selection)
			except MissingCustomFieldError as e:
				logger.error('{0} Skipping the app.'.format(e))
				summary.apps_skipped += 1
				continue

			summary.apps_with_results += 1
			for flaw in flaws:
				row = project_row(app, selection, flaw, include_description=settings.include_description)
				writer.write(custom_field.name, row)

		summary.rows_written = writer.rows_written

	logger.info('{0} of {1} apps had results, {2} rows written.'.format(
		summary.apps_with_results, summary.apps_total, summary.rows_written))
	return summary


def main(argv=None):
	start = datetime.datetime.now()

	args = parse_args(argv)
	configure_logging(args.debug)
	settings = Settings.from_args(args)

	try:
		credentials = load_credentials(settings.creds_file)
		api = XMLAPI(credentials=credentials)
		run(api, settings)
	except ConfigError as e:
		logger.error(e)
		sys.exit(1)
	except VeracodeAPIError as e:
		logger.error(e)
		sys.exit(1)
	except OSError as e:
		logger.error('Unable to write the output file: {0}'.format(e))
		sys.exit(1)
	except csv.Error as e:
		logger.error('Unable to write a CSV row: {0}'.format(e))
		sys.exit(1)
	except KeyboardInterrupt:
		print('\nIt looks like the script has been terminated by the user.')
		sys.exit(1)

	elapsed = datetime.datetime.now() - start
	print('Run time: {0} '.format(elapsed))
