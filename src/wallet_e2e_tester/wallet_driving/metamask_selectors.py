"""MetaMask extension page locations and test ids."""

HOME_PAGE = "home.html"
NOTIFICATION_PAGE = "notification.html"

# Used only to finish onboarding when the secret is a private key;
# the key is imported as an extra account afterwards.
DEFAULT_ONBOARDING_PHRASE = "test test test test test test test test test test test junk"

TERMS_CHECKBOX = "onboarding-terms-checkbox"
IMPORT_WALLET_BUTTON = "onboarding-import-wallet"
METAMETRICS_DECLINE_BUTTON = "metametrics-no-thanks"
SRP_WORD_COUNT_SELECT = ".import-srp__number-of-words-dropdown select"
SRP_WORD_INPUT = "import-srp__srp-word-{index}"
SRP_CONFIRM_BUTTON = "import-srp-confirm"
PASSWORD_NEW_INPUT = "create-password-new"
PASSWORD_CONFIRM_INPUT = "create-password-confirm"
PASSWORD_TERMS_CHECKBOX = "create-password-terms"
PASSWORD_IMPORT_BUTTON = "create-password-import"
ONBOARDING_DONE_BUTTON = "onboarding-complete-done"
PIN_EXTENSION_NEXT_BUTTON = "pin-extension-next"
PIN_EXTENSION_DONE_BUTTON = "pin-extension-done"

ACCOUNT_MENU_BUTTON = "account-menu-icon"
ACCOUNT_MENU_ACTION_BUTTON = "multichain-account-menu-popover-action-button"
IMPORT_ACCOUNT_LABEL = "Import account"
PRIVATE_KEY_INPUT = "#private-key-box"
IMPORT_ACCOUNT_CONFIRM_BUTTON = "import-account-confirm-button"

FOOTER_NEXT_BUTTON = "page-container-footer-next"
CONFIRMATION_SUBMIT_BUTTON = "confirmation-submit-button"

ACTIVITY_TAB = "account-overview__activity-tab"
PENDING_TRANSACTION = ".transaction-status-label--pending"
CONFIRMED_TRANSACTION = ".transaction-status-label--confirmed"

ADD_CHAIN_SCRIPT = """(chain) => window.ethereum.request({
  method: 'wallet_addEthereumChain',
  params: [chain],
})"""
