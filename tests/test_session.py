"""Unit tests for aws_authenticate.session module."""

from unittest.mock import Mock, patch

from aws_authenticate.session import (
    build_client_config,
    build_session_kwargs,
    create_sts_client,
    get_https_proxy
)


class TestGetHttpsProxy:
    """Tests for get_https_proxy() function."""

    def test_upper_case_wins(self):
        """HTTPS_PROXY is preferred over https_proxy."""
        environ = {'HTTPS_PROXY': 'http://upper:3128', 'https_proxy': 'http://lower:3128'}

        assert get_https_proxy(environ) == 'http://upper:3128'

    def test_lower_case(self):
        """https_proxy is used when HTTPS_PROXY is absent."""
        assert get_https_proxy({'https_proxy': 'http://lower:3128'}) == 'http://lower:3128'

    def test_no_proxy(self):
        """Empty or missing values mean no proxy."""
        assert get_https_proxy({}) is None
        assert get_https_proxy({'HTTPS_PROXY': ''}) is None

    def test_reads_process_environment(self, monkeypatch):
        """Defaults to os.environ."""
        monkeypatch.setenv('HTTPS_PROXY', 'http://proxy.internal:8080')

        assert get_https_proxy() == 'http://proxy.internal:8080'


class TestBuildSessionKwargs:
    """Tests for build_session_kwargs() function."""

    def test_nothing_set(self):
        """No overrides give an empty dict."""
        assert build_session_kwargs() == {}

    def test_region_and_profile(self):
        """Region and profile map to boto3.Session arguments."""
        assert build_session_kwargs('eu-west-1', 'dev') == {
            'region_name': 'eu-west-1',
            'profile_name': 'dev'
        }

    def test_assumed_credentials_replace_profile(self):
        """Keys in the mapping take precedence over the profile."""
        env = {
            'AWS_PROFILE': 'dev',
            'AWS_ACCESS_KEY_ID': 'ASIAKEY',
            'AWS_SECRET_ACCESS_KEY': 'secret',
            'AWS_SESSION_TOKEN': 'token'
        }

        kwargs = build_session_kwargs('eu-west-1', 'dev', env)

        assert kwargs == {
            'region_name': 'eu-west-1',
            'aws_access_key_id': 'ASIAKEY',
            'aws_secret_access_key': 'secret',
            'aws_session_token': 'token'
        }

    def test_mapping_without_credentials(self):
        """A mapping with only profile or region keys adds nothing."""
        assert build_session_kwargs(None, 'dev', {'AWS_PROFILE': 'dev'}) == {'profile_name': 'dev'}


class TestBuildClientConfig:
    """Tests for build_client_config() function."""

    def test_no_proxy(self):
        """No config without a proxy."""
        assert build_client_config({}) is None

    def test_proxy(self):
        """The proxy is configured for https."""
        config = build_client_config({'HTTPS_PROXY': 'http://proxy.internal:8080'})

        assert config.proxies == {'https': 'http://proxy.internal:8080'}


class TestCreateStsClient:
    """Tests for create_sts_client() function."""

    @patch('aws_authenticate.session.boto3.Session')
    def test_client_without_proxy(self, mock_session):
        """The session gets the overrides and an sts client is created."""
        mock_session_instance = Mock()
        mock_session.return_value = mock_session_instance

        client = create_sts_client('us-east-1', 'dev')

        mock_session.assert_called_once_with(region_name='us-east-1', profile_name='dev')
        mock_session_instance.client.assert_called_once_with('sts')
        assert client is mock_session_instance.client.return_value

    @patch('aws_authenticate.session.boto3.Session')
    def test_client_with_proxy(self, mock_session, monkeypatch):
        """The proxy config is handed to the client."""
        monkeypatch.setenv('https_proxy', 'http://proxy.internal:8080')
        mock_session_instance = Mock()
        mock_session.return_value = mock_session_instance

        create_sts_client()

        mock_session.assert_called_once_with()
        args, kwargs = mock_session_instance.client.call_args
        assert args == ('sts',)
        assert kwargs['config'].proxies == {'https': 'http://proxy.internal:8080'}
