"""Credit ledger and promotion code redemption engine"""
