"""Tests for the interactive menu."""

import pytest
from click.testing import CliRunner

from minitask.cli import main
from minitask.version import VERSION

EXIT = "11\n"
ADD_MILK = "1\n1\nBuy milk\n\n"
ADD_BUG = "1\n2\nFix bug\nCrashes\n3\n"


@pytest.fixture
def run():
    runner = CliRunner()

    def _run(*steps):
        return runner.invoke(main, input="".join(steps))
    return _run


class TestMenu:
    """Test menu navigation."""

    def test_exit(self, run):
        result = run(EXIT)
        assert result.exit_code == 0
        assert "Welcome to the Miniature Task Tracker!" in result.output
        assert "10. View Tasks as YAML" in result.output
        assert "Thank you for using the Task Tracker. Goodbye!" in result.output

    def test_menu_subcommand(self):
        result = CliRunner().invoke(main, ["menu"], input=EXIT)
        assert result.exit_code == 0
        assert "Goodbye!" in result.output

    def test_end_of_input_leaves_menu(self, run):
        result = run("2\n")
        assert result.exit_code == 0
        assert "Goodbye!" not in result.output

    def test_invalid_option(self, run):
        result = run("42\n", EXIT)
        assert "Invalid option, please try again." in result.output

    def test_invalid_setting_reported(self, monkeypatch):
        """Test that a bad environment value is reported and the menu still runs."""
        monkeypatch.setenv('MINITASK_LOG_LEVEL', 'chatty')
        result = CliRunner().invoke(main, input=EXIT)
        assert result.exit_code == 0
        assert "Warning: ignoring invalid setting MINITASK_LOG_LEVEL='chatty'" in result.output
        assert "Goodbye!" in result.output

    def test_invalid_date_format_uses_default(self, monkeypatch):
        monkeypatch.setenv('MINITASK_DATE_FORMAT', '%Y')
        result = CliRunner().invoke(main, input="1\n3\nReport\n\n12/25/2026\n2\n" + EXIT)
        assert result.exit_code == 0
        assert "MINITASK_DATE_FORMAT" in result.output
        assert "Due Date: 12/25/2026" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert VERSION in result.output


class TestAddTask:
    """Test the add task flow."""

    def test_add_basic_task(self, run):
        result = run(ADD_MILK, "2\n", EXIT)
        assert "Task added successfully! (ID 1)" in result.output
        assert "Title: Buy milk" in result.output
        assert "Status: Pending" in result.output

    def test_add_priority_task(self, run):
        result = run(ADD_BUG, "2\n", EXIT)
        assert "Description: Crashes" in result.output
        assert "Priority: 3" in result.output

    def test_out_of_range_priority(self, run):
        """Test that the task is created but the priority is reported as rejected."""
        result = run(ADD_MILK, "1\n2\nFix bug\n\n7\n", "2\n", EXIT)
        assert "Priority must be between 1 and 5." in result.output
        assert "Task added successfully! (ID 2)" in result.output
        assert "Priority: 0" in result.output

    def test_non_numeric_priority(self, run):
        result = run("1\n2\nFix bug\n\nhigh\n", "2\n", EXIT)
        assert "Invalid priority. Task not created." in result.output
        assert "No tasks available." in result.output

    def test_add_deadline_task(self, run):
        result = run("1\n3\nReport\n\n12/25/2026\n", "2\n", EXIT)
        assert "Due Date: 12/25/2026" in result.output

    def test_invalid_date(self, run):
        result = run("1\n3\nReport\n\nsoon\n", EXIT)
        assert "Invalid date format. Task not created." in result.output

    def test_empty_title(self, run):
        """Test that an empty title creates nothing."""
        result = run("1\n1\n\n\n", "2\n", EXIT)
        assert "Title cannot be empty." in result.output
        assert "Task added successfully!" not in result.output
        assert "No tasks available." in result.output

    def test_invalid_type(self, run):
        result = run("1\n9\nBuy milk\n\n", EXIT)
        assert "Invalid task type. Task not created." in result.output


class TestToggleAndTags:
    """Test mutate-by-id flows."""

    def test_toggle_and_filter(self, run):
        result = run(ADD_MILK, ADD_BUG, "3\n1\n", "8\n", EXIT)
        assert "Task 'Buy milk' marked as complete." in result.output
        completed = result.output.split("--- Filtered Tasks: Completed Tasks ---")[1]
        assert "Title: Buy milk" in completed
        assert "Title: Fix bug" not in completed

    def test_toggle_back_to_pending(self, run):
        result = run(ADD_MILK, "3\n1\n", "3\n1\n", EXIT)
        assert "Task 'Buy milk' marked as pending." in result.output

    def test_toggle_missing_task(self, run):
        result = run("3\n9\n", EXIT)
        assert "Task with ID 9 not found." in result.output

    def test_invalid_id(self, run):
        result = run("3\nabc\n", EXIT)
        assert "Invalid ID format." in result.output

    def test_duplicate_tag(self, run):
        result = run(ADD_MILK, "4\n1\nurgent\n", "4\n1\nurgent\n", "2\n", EXIT)
        assert "Tag 'urgent' added to task 'Buy milk'." in result.output
        assert "Invalid or duplicate tag: 'urgent'" in result.output
        assert "Tags: urgent\n" in result.output

    def test_tag_missing_task(self, run):
        result = run("4\n5\n", EXIT)
        assert "Task with ID 5 not found." in result.output

    def test_remove_tag(self, run):
        result = run(ADD_MILK, "4\n1\nhome\n", "5\n1\nwork\n", "5\n1\nhome\n", EXIT)
        assert "Tag 'work' not found." in result.output
        assert "Tag 'home' removed." in result.output


class TestSortAndFilter:
    """Test sort and filter views."""

    def test_sort_empty(self, run):
        result = run("6\n", EXIT)
        assert "No tasks to sort." in result.output

    def test_sort_by_title_then_id(self, run):
        result = run("1\n1\nbanana\n\n", "1\n1\nApple\n\n", "6\n", EXIT)
        assert "Tasks sorted." in result.output
        sorted_view = result.output.split("Tasks sorted.")[1]
        assert sorted_view.index("Title: Apple") < sorted_view.index("Title: banana")

        result = run("1\n1\nbanana\n\n", "1\n1\nApple\n\n", "6\n", "7\n", EXIT)
        by_id = result.output.split("Tasks sorted.")[2]
        assert by_id.index("Title: banana") < by_id.index("Title: Apple")

    def test_filter_empty_store(self, run):
        result = run("9\n", EXIT)
        assert "--- Filtered Tasks: Pending Tasks ---" in result.output
        assert "No tasks available to filter." in result.output

    def test_filter_no_matches(self, run):
        result = run(ADD_MILK, "8\n", EXIT)
        assert "No tasks match the filter: Completed Tasks" in result.output

    def test_yaml_view(self, run):
        result = run(ADD_BUG, "10\n", EXIT)
        assert "--- Tasks as YAML ---" in result.output
        assert "kind: priority" in result.output
        assert "priority: 3" in result.output
