"""RateStore: rate stores, view ratings as an owner, administer users and stores."""
