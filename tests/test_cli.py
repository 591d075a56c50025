"""Tests for the command-line entry point"""

import io
import json
import os
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from github_query import cli
from tests.fakes import FakeClient, api_error, pr_node, prs_response, repos_response


class TestMain(unittest.TestCase):
    """Test exit codes and output streams"""

    def setUp(self):
        patcher = patch.object(cli, "load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)

        env_patcher = patch.dict(os.environ, {"GITHUB_TOKEN": "secret"}, clear=True)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

    def _run(self, argv, responses=()):
        client = FakeClient(responses)
        stdout, stderr = io.StringIO(), io.StringIO()
        with patch.object(cli, "GraphQLClient", return_value=client) as client_cls, \
                redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(argv)
        return code, stdout.getvalue(), stderr.getvalue(), client, client_cls

    def test_repos(self):
        """Test repo names are printed as indented JSON"""
        code, out, err, client, client_cls = self._run(
            ["-list", "repos", "-org", "myOrg"], [repos_response(["alpha", "beta"])]
        )

        self.assertEqual(code, 0)
        self.assertEqual(out, '[\n  "alpha",\n  "beta"\n]\n')
        client_cls.assert_called_once_with("secret", "https://api.github.com/graphql")

    def test_empty_result_prints_empty_list(self):
        """Test an organization without repos prints []"""
        code, out, _, _, _ = self._run(["--list", "repos", "--org", "myOrg"], [repos_response([])])

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), [])
        self.assertEqual(out, "[]\n")

    def test_pull_requests(self):
        """Test pull requests within the range are printed"""
        code, out, _, client, _ = self._run(
            ["-list", "pull-requests", "-org", "myOrg", "-repo", "myRepo",
             "-since", "2018-07-01", "-until", "2019-01-01"],
            [prs_response([pr_node(1, "2018-08-01T00:00:00Z"), pr_node(2, "2017-08-01T00:00:00Z")])],
        )

        self.assertEqual(code, 0)
        self.assertEqual([pr["number"] for pr in json.loads(out)], [1])
        self.assertEqual(client.calls[0][1]["owner"], "myOrg")

    def test_validation_error(self):
        """Test invalid options print a diagnostic and usage, exit 1, and skip the network"""
        code, out, err, client, client_cls = self._run(["-list", "repos", "-org", "myOrg", "-repo", "myRepo"])

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Incompatible option: repo", err)
        self.assertIn("usage:", err)
        self.assertIn("GITHUB_TOKEN", err)
        client_cls.assert_not_called()

    def test_bad_date(self):
        """Test a malformed date exits 1"""
        code, out, err, _, client_cls = self._run(["-list", "commits", "-org", "o", "-repo", "r", "-since", "July"])

        self.assertEqual(code, 1)
        self.assertIn("Invalid date", err)
        client_cls.assert_not_called()

    def test_missing_token(self):
        """Test a missing token exits 1"""
        del os.environ["GITHUB_TOKEN"]

        code, _, err, _, client_cls = self._run(["-list", "repos", "-org", "myOrg"])

        self.assertEqual(code, 1)
        self.assertIn("Missing environment variable: GITHUB_TOKEN", err)
        client_cls.assert_not_called()

    def test_unexpected_argument(self):
        """Test unrecognized arguments are usage errors"""
        code, _, err, _, _ = self._run(["-list", "repos", "-org", "myOrg", "extra"])

        self.assertEqual(code, 1)
        self.assertIn("unrecognized arguments", err)

    def test_query_error(self):
        """Test a failing query prints the error once and no JSON"""
        code, out, err, _, _ = self._run(
            ["-list", "repos", "-org", "myOrg"],
            [repos_response(["a"], end_cursor="c1", has_next_page=True), api_error("GitHub API error: 502 Bad Gateway")],
        )

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err.strip(), "GitHub API error: 502 Bad Gateway")

    def test_dates_ignored_for_repos(self):
        """Test a date range with repos is accepted with a warning"""
        with self.assertLogs("github_query.cli", level="WARNING") as logs:
            code, _, _, _, _ = self._run(
                ["-list", "repos", "-org", "myOrg", "-since", "2018-07-01"], [repos_response(["a"])]
            )

        self.assertEqual(code, 0)
        self.assertIn("ignored", logs.output[0])


if __name__ == "__main__":
    unittest.main()
