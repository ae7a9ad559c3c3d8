# -*- coding: utf-8 -*-

import logging

CLOSED_REMEDIATION_STATUSES = ('Fixed', 'Cannot Reproduce')
DYNAMIC_MODULE = 'dynamic_analysis'
MANUAL_MODULE = 'manual_analysis'


class FlawFilter:
	"""
	Decides which flaws of a build reach the report.

	Closed flaws (Fixed, Cannot Reproduce) never pass. The include_* flags
	widen the output: with include_non_policy_violating off only flaws that
	affect policy compliance pass, with include_mitigated off accepted
	mitigations are dropped. static_only / dynamic_only narrow it by analysis
	module; setting both lets nothing through.
	"""

	def __init__(self,
		include_non_policy_violating=False,
		include_mitigated=False,
		static_only=False,
		dynamic_only=False,):

		self.logger = logging.getLogger('Flaw Filter')

		self.include_non_policy_violating = include_non_policy_violating
		self.include_mitigated = include_mitigated
		self.static_only = static_only
		self.dynamic_only = dynamic_only

		if self.static_only and self.dynamic_only:
			self.logger.warning('Both static and dynamic only were requested, no flaw will pass.')

	def keep(self, flaw):
		if flaw.remediation_status in CLOSED_REMEDIATION_STATUSES:
			return False
		if not self.include_non_policy_violating and flaw.affects_policy_compliance == 'false':
			return False
		if not self.include_mitigated and flaw.mitigation_status == 'accepted':
			return False
		if self.static_only and flaw.module == DYNAMIC_MODULE:
			return False
		if self.dynamic_only and flaw.module != DYNAMIC_MODULE:
			return False
		return True

	def apply(self, flaws):
		for flaw in flaws:
			if self.keep(flaw):
				yield flaw
			else:
				self.logger.debug('Dropping flaw {0}.'.format(flaw.issueid))
