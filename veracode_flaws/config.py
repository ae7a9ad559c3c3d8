# -*- coding: utf-8 -*-

import os
import yaml
import logging
import datetime

from veracode_flaws.filters import FlawFilter

DEFAULT_API_BASE = "https://analysiscenter.veracode.com/api/5.0/"
DEFAULT_OUTPUT_NAME = 'default'

logger = logging.getLogger('Config')


class ConfigError(Exception):
	pass


class Credentials:
	"""
	What the XML API client needs to authenticate.

	user / passwd selects HTTP Basic. veracode_api_key_id /
	veracode_api_key_secret selects HMAC signing. When neither pair is set
	the HMAC plugin falls back to ~/.veracode/credentials or the
	VERACODE_API_KEY_ID / VERACODE_API_KEY_SECRET environment variables.
	"""

	def __init__(self,
		user=None,
		passwd=None,
		api_key_id=None,
		api_key_secret=None,
		api_base=None,):

		self.user = user
		self.passwd = passwd
		self.api_key_id = api_key_id
		self.api_key_secret = api_key_secret
		self.api_base = api_base or DEFAULT_API_BASE

	@property
	def uses_basic_auth(self):
		return bool(self.user)

	@property
	def uses_hmac_keys(self):
		return bool(self.api_key_id)


def load_credentials(path=None):
	if not path:
		logger.debug('No credentials file given, using the default Veracode credentials lookup.')
		return Credentials()

	logger.info('Getting credentials from {0}.'.format(path))
	try:
		with open(path, 'r') as stream:
			data = yaml.load(stream, Loader=yaml.FullLoader)
	except (OSError, yaml.YAMLError) as e:
		raise ConfigError('Unable to read credentials file {0}: {1}'.format(path, e))

	if not isinstance(data, dict):
		raise ConfigError('Credentials file {0} must be a YAML mapping.'.format(path))

	user = data.get('user', '')
	passwd = data.get('passwd', '')
	api_key_id = data.get('veracode_api_key_id', '')
	api_key_secret = data.get('veracode_api_key_secret', '')

	if user and not passwd:
		raise ConfigError('Credentials file {0} has a user but no passwd.'.format(path))
	if api_key_id and not api_key_secret:
		raise ConfigError('Credentials file {0} has an API key id but no secret.'.format(path))
	if not user and not api_key_id:
		raise ConfigError('Credentials file {0} has neither user/passwd nor '
			'veracode_api_key_id/veracode_api_key_secret.'.format(path))

	return Credentials(
		user=user,
		passwd=passwd,
		api_key_id=api_key_id,
		api_key_secret=api_key_secret,
		api_base=data.get('api_base', ''),
	)


class Settings:
	def __init__(self,
		creds_file='',
		include_non_policy_violating=False,
		include_mitigated=False,
		static_only=False,
		dynamic_only=False,
		include_description=False,
		output_file_name=DEFAULT_OUTPUT_NAME,
		fail_on_write_error=False,
		debug=False,):

		self.creds_file = creds_file
		self.include_non_policy_violating = include_non_policy_violating
		self.include_mitigated = include_mitigated
		self.static_only = static_only
		self.dynamic_only = dynamic_only
		self.include_description = include_description
		self.output_file_name = output_file_name
		self.fail_on_write_error = fail_on_write_error
		self.debug = debug

	@classmethod
	def from_args(cls, args):
		return cls(
			creds_file=args.creds_file,
			include_non_policy_violating=args.nonpv,
			include_mitigated=args.mitigated,
			static_only=args.static,
			dynamic_only=args.dynamic,
			include_description=args.desc,
			output_file_name=args.output_file_name,
			fail_on_write_error=args.fail_on_write_error,
			debug=args.debug,
		)

	def flaw_filter(self):
		return FlawFilter(
			include_non_policy_violating=self.include_non_policy_violating,
			include_mitigated=self.include_mitigated,
			static_only=self.static_only,
			dynamic_only=self.dynamic_only,
		)


def output_path(name=DEFAULT_OUTPUT_NAME, now=None):
	if name and name != DEFAULT_OUTPUT_NAME:
		return os.path.expanduser(name)

	if now is None:
		now = datetime.datetime.now()
	return 'allVeracodeFlaws_{0}.csv'.format(now.strftime('%Y%m%d_%H%M%S'))
