#!/usr/bin/env python3
"""
Fund a local account and send a transfer through the backend.

Signs with a local Ed25519 key instead of a custody provider, so it only
makes sense against a development backend.
"""

import argparse
import asyncio
import json
import os
import sys

from movewallet.config import WalletConfig
from movewallet.core.wallet import MovementWallet
from movewallet.errors import TransactionError, WalletError
from movewallet.logs import setup_logging
from movewallet.signing.ed25519 import Ed25519Signer


async def run(args: argparse.Namespace) -> int:
    config = WalletConfig(base_url=args.base_url, verify_hash_binding=args.verify_hash)
    setup_logging(config)

    private_key = args.private_key or os.environ.get("MOVEWALLET_PRIVATE_KEY")
    signer = Ed25519Signer(private_key) if private_key else Ed25519Signer.generate()

    print(f"\n📬 Address: {signer.address}")
    print(f"   Public key: {signer.public_key_hex}")

    async with MovementWallet(signer=signer, config=config) as wallet:
        try:
            if args.faucet:
                await wallet.request_faucet(signer.address)
                print(f"\n🚰 Faucet funded {config.default_faucet_amount:,} octas")

            balance = await wallet.get_wallet_balance(signer.address)
            print(f"\n💰 Balance: {balance}")

            info = await wallet.get_account_info(signer.address)
            print(f"\n📦 Account info:\n{json.dumps(info, indent=2)}")
        except WalletError as e:
            print(f"\n❌ {e}")
            return 1

        if not args.to:
            return 0

        try:
            result = await wallet.sign_and_submit_transaction(
                signer.public_key_hex,
                signer.address,
                "0x1::aptos_account::transfer",
                function_arguments=[args.to, args.amount],
            )
        except TransactionError as e:
            print(f"\n❌ {e.stage.value} failed: {e}")
            return 1

        print(f"\n✅ Submitted: {result.transaction_hash or json.dumps(result.to_dict())}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Send a transfer through a local backend")
    parser.add_argument(
        "--base-url", "-u",
        default="http://localhost:3000",
        help="Backend base URL (default: http://localhost:3000)"
    )
    parser.add_argument(
        "--private-key", "-k",
        help="Ed25519 private key in hex (default: $MOVEWALLET_PRIVATE_KEY or a new key)"
    )
    parser.add_argument("--faucet", action="store_true", help="Fund the account first")
    parser.add_argument("--to", help="Recipient address; omit to only show the account")
    parser.add_argument("--amount", type=int, default=100, help="Amount in octas (default: 100)")
    parser.add_argument("--verify-hash", action="store_true", help="Check the backend hash locally")

    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
