from sharevault.constants import MAX_UINT256
from sharevault.errors import AmountOutOfRange, InsufficientAllowance, InsufficientShares


def check_uint256(amount):
    if not isinstance(amount, int) or isinstance(amount, bool) or not 0 <= amount <= MAX_UINT256:
        raise AmountOutOfRange("amount out of range")
    return amount


class ShareLedger:
    """
    Share balances, allowances and the total shares counter. Pure map
    arithmetic, every check happens before the mutation it protects.
    """

    def __init__(self):
        self.balances = {}
        self.allowances = {}
        self.total_shares = 0

    def balance_of(self, account):
        return self.balances.get(account, 0)

    def allowance(self, owner, spender):
        return self.allowances.get((owner, spender), 0)

    def holders(self):
        return iter(self.balances.items())

    # shares

    def credit_shares(self, account, amount):
        check_uint256(amount)
        if self.total_shares + amount > MAX_UINT256:
            raise AmountOutOfRange("total shares overflow")
        self.balances[account] = self.balance_of(account) + amount
        self.total_shares += amount

    def debit_shares(self, account, amount):
        check_uint256(amount)
        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientShares("insufficient shares")
        self._set_balance(account, balance - amount)
        self.total_shares -= amount

    def transfer_shares(self, sender, recipient, amount):
        check_uint256(amount)
        balance = self.balance_of(sender)
        if amount > balance:
            raise InsufficientShares("insufficient shares")
        # sender == recipient nets to zero
        self._set_balance(sender, balance - amount)
        self.balances[recipient] = self.balance_of(recipient) + amount

    def _set_balance(self, account, amount):
        if amount == 0:
            self.balances.pop(account, None)
        else:
            self.balances[account] = amount

    # allowances

    def set_allowance(self, owner, spender, amount):
        check_uint256(amount)
        if amount == 0:
            self.allowances.pop((owner, spender), None)
        else:
            self.allowances[(owner, spender)] = amount

    def consume_allowance(self, owner, spender, amount):
        check_uint256(amount)
        allowance = self.allowance(owner, spender)
        if allowance == MAX_UINT256:
            return
        if amount > allowance:
            raise InsufficientAllowance("insufficient allowance")
        self.set_allowance(owner, spender, allowance - amount)

    def check_invariants(self):
        assert sum(self.balances.values()) == self.total_shares, "shares out of sync with total"
        assert all(balance > 0 for balance in self.balances.values()), "stale zero balance"
