"""Static texts of the check runs the gate publishes."""

PENDING_TITLE = "Rally validation is in progress..."
PENDING_SUMMARY = (
    "We're currently validating the status of any Rally artifacts associated with "
    "this pull request. Please stand by."
)
PASS_TITLE = "Rally artifacts have been validated"
PASS_SUMMARY = "All Rally artifacts have been validated!"
FAIL_TITLE = "Rally artifact validation failed"
FAIL_SUMMARY = "Please provide a valid Rally artifact"
ERROR_PREFIX = "Error occurred while validating Rally Artifacts: "

OVERRIDE_ACTION_IDENTIFIER = "override"
OVERRIDE_ACTION_LABEL = "Override"
OVERRIDE_ACTION_DESCRIPTION = "Manually mark this check as passed"

EXAMPLE_CONFIG = """\
---
# Name of the GitHub Check
checksName: integrations/rally

# Check PR Body for Rally artifact
checkPRBody: true

# Check PR Title for Rally artifact
checkPRTitle: true

# Check all commit messages for a Rally artifact
checkCommitMessages: true

# Check PR labels for Rally artifact
checkPRLabels: false

# Comment on the PR in addition to the check message?
commentOnPull: false

# Move artifacts referenced with /completes to Completed on merge
mergeOnPRBody: false
promotionCommands:
  - completes

rally:
  server: https://rally1.rallydev.com

  # Which workspace OID this repo will link to
  workspace: 12345

  # Which projects this repo will link to.
  # To have it connect to any project, leave this value blank
  projects:
    - Sample Project
    - devops-engineering

  # List of valid Rally objects to check
  objects:
    - defect
    #- defectsuite
    #- task
    #- testcase
    #- hierarchicalrequirement
    - userstory
    #- story

  # List of Rally states that an issue must be in in order to pass
  states:
    - Defined
    - In-Progress
"""


def override_title(login: str) -> str:
    return f"Rally artifact validation manually overridden by @{login}"


def override_summary(login: str) -> str:
    return f"Commit sign-off was manually approved by @{login}"


def no_config_message(config_path: str) -> str:
    """Markdown shown when enforcement is on but the repository has no gate config."""
    return (
        "No config file exists in this repository. Please create a valid config file "
        f"at `{config_path}`\n\nExample config file:\n\n```yaml\n{EXAMPLE_CONFIG}```\n"
    )
