# -*- coding: utf-8 -*-

"""
Picks the build whose detailed report feeds the output.

A build without final results answers detailedreport.do with an error. In
the worst case the three most recent builds are a pending static, a pending
dynamic and a pending manual scan, so the fourth most recent build is the
last one that can still hold results.
"""

import logging

from veracode_flaws.api import DetailedReportError

MAX_BUILD_PROBES = 4

logger = logging.getLogger('Build Selector')


class BuildSelection:
	def __init__(self, build_id=None, report=None):
		self.build_id = build_id
		self.report = report

	@property
	def flaws(self):
		return self.report.flaws

	@property
	def custom_fields(self):
		return self.report.custom_fields


def select_build(api, builds, max_probes=MAX_BUILD_PROBES):
	"""
	Walk builds (oldest first) back from the newest and return a
	BuildSelection for the first one with a usable detailed report, or None.
	"""
	if not builds:
		logger.debug('No builds to probe.')
		return None

	for build in list(reversed(builds))[:max_probes]:
		try:
			report = api.detailedreport(build=build.build_id)
		except DetailedReportError as e:
			logger.info('Build {0} has no results ({1}), trying the previous build.'.format(build.build_id, e))
			continue

		logger.debug('Using build {0}.'.format(build.build_id))
		return BuildSelection(build_id=build.build_id, report=report)

	return None
