import runpy
import sys

import fire
import pytest
from click.testing import CliRunner

from credential_nft import create_key_pair
from credential_nft.offchain import deploy
from credential_nft.offchain.admin import (
    grant_role,
    pause,
    set_minter_allower,
    toggle_transferability,
)
from credential_nft.offchain.credential import (
    admin_mint,
    batch_admin_mint,
    burn,
    mint,
    show,
    toggle_validity,
    transfer,
)
from credential_nft.offchain.gateway import sign_nonce
from credential_nft.offchain.guild import add as add_guild
from credential_nft.onchain.errors import (
    BadSignature,
    ReplayedNonce,
    TokenPaused,
    TransfersDisabled,
    Unauthorized,
)
from credential_nft.onchain.events import CredentialCreated
from credential_nft.onchain.types import MINTER_ROLE
from credential_nft.utils import context, get_address, keys, load_contract
from credential_nft.utils import logging as log_setup

NAMES = ["admin", "gateway", "alice", "bob"]


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.setattr(keys, "keys_dir", tmp_path / "keys")
    monkeypatch.setattr(context, "state_path", tmp_path / "state.json")
    runner = CliRunner()
    for name in NAMES:
        result = runner.invoke(create_key_pair.main, [name])
        assert result.exit_code == 0, result.output
    deploy.main()
    return tmp_path


def test_create_key_pair_refuses_overwrite(workspace):
    result = CliRunner().invoke(create_key_pair.main, ["admin"])
    assert result.exit_code != 0
    assert isinstance(result.exception, FileExistsError)


def test_deploy_refuses_overwrite(workspace):
    with pytest.raises(FileExistsError):
        deploy.main()
    deploy.main(overwrite=True)


def test_signed_mint_flow(workspace):
    nonce, signature = sign_nonce.main(name="gateway", nonce="n1")
    token_id = mint.main(
        nonce,
        signature.to_hex(),
        name="alice",
        token_uri="ipfs://x",
        ceramic_uri="ceramic://y",
    )
    assert token_id == 0

    contract = load_contract()
    assert contract.owner_of(0) == get_address("alice")
    assert contract.token_uri(0) == "ipfs://x"
    assert contract.is_nonce_used("n1")
    assert CredentialCreated(0) in contract.events()

    with pytest.raises(ReplayedNonce):
        mint.main(nonce, signature.to_hex(), name="alice")

    info = show.main(0)
    assert info["owner"] == get_address("alice")
    assert info["valid"] is False


def test_fresh_nonce_per_signature(workspace):
    nonce_a, _ = sign_nonce.main()
    nonce_b, _ = sign_nonce.main()
    assert nonce_a != nonce_b


def printed(capsys):
    out = capsys.readouterr().out
    return dict(line.split(": ", 1) for line in out.splitlines() if ": " in line)


def test_signed_mint_from_command_line(workspace, capsys):
    fire.Fire(sign_nonce.main, command=["--name", "gateway"])
    output = printed(capsys)
    nonce, signature = output["nonce"], output["signature"]

    command = ["--nonce", nonce, "--signature", signature, "--name", "alice"]
    assert fire.Fire(mint.main, command=command + ["--token_uri", "ipfs://x"]) == 0
    contract = load_contract()
    assert contract.owner_of(0) == get_address("alice")
    assert contract.token_uri(0) == "ipfs://x"
    assert contract.is_nonce_used(nonce)

    with pytest.raises(ReplayedNonce):
        fire.Fire(mint.main, command=command)


def test_signed_mint_from_command_line_to_literal_address(workspace, capsys):
    fire.Fire(sign_nonce.main, command=["--nonce", "n1"])
    signature = printed(capsys)["signature"]
    bob = get_address("bob")
    command = ["--nonce", "n1", "--signature", signature, "--recipient", bob]
    assert fire.Fire(mint.main, command=command + ["--name", "alice"]) == 0
    assert load_contract().owner_of(0) == bob


def test_batch_admin_mint_from_command_line(workspace):
    command = [
        "--recipients=[alice,bob]",
        "--token_uris=[ipfs://a,ipfs://b]",
        "--ceramic_uris=[ceramic://a,ceramic://b]",
    ]
    assert fire.Fire(batch_admin_mint.main, command=command) == [0, 1]
    contract = load_contract()
    assert contract.owner_of(1) == get_address("bob")
    assert contract.token_uri(1) == "ipfs://b"
    assert contract.ceramic_uri(0) == "ceramic://a"


def test_admin_flow(workspace):
    assert admin_mint.main("alice", token_uri="ipfs://a") == 0
    token_ids = batch_admin_mint.main(["alice", "bob"], ["u1", "u2"], ["c1", "c2"])
    assert token_ids == [1, 2]
    assert toggle_validity.main(0) is True
    assert add_guild.main("builders", ["alice"]) == 0

    with pytest.raises(TransfersDisabled):
        transfer.main(0, "bob", name="alice")
    assert toggle_transferability.main() is True
    transfer.main(0, "bob", name="alice")
    burn.main(2, name="bob")

    contract = load_contract()
    assert contract.owner_of(0) == get_address("bob")
    assert contract.is_valid(0)
    assert contract.guild(0).admins == [get_address("alice")]
    assert contract.total_supply() == 2
    assert show.main()["guild_count"] == 1


def test_role_and_pause_flow(workspace):
    with pytest.raises(Unauthorized):
        admin_mint.main("bob", name="alice")
    grant_role.main("alice", role=MINTER_ROLE)
    assert admin_mint.main("bob", name="alice") == 0

    pause.main()
    with pytest.raises(TokenPaused):
        admin_mint.main("bob", name="alice")
    pause.main(unpause=True)
    grant_role.main("alice", role=MINTER_ROLE, revoke=True)
    with pytest.raises(Unauthorized):
        admin_mint.main("bob", name="alice")


def test_rotate_gateway(workspace):
    assert set_minter_allower.main("bob") == get_address("bob")
    nonce, signature = sign_nonce.main(name="gateway", nonce="n1")
    with pytest.raises(BadSignature):
        mint.main(nonce, signature.to_hex(), name="alice")
    nonce, signature = sign_nonce.main(name="bob", nonce="n1")
    assert mint.main(nonce, signature.to_hex(), name="alice") == 0


def test_persisted_state_round_trip(workspace):
    admin_mint.main("alice")
    add_guild.main("builders", ["alice", "bob"])
    contract = load_contract()
    contract.approve(get_address("alice"), get_address("bob"), 0)
    context.save_contract(contract)

    restored = load_contract()
    assert restored.snapshot() == contract.snapshot()
    assert restored.events() == contract.events()
    assert restored.get_approved(0) == get_address("bob")


@pytest.mark.parametrize(
    "script",
    [
        "credential_nft.offchain.credential.show",
        "credential_nft.offchain.gateway.sign_nonce",
        "credential_nft.offchain.admin.toggle_transferability",
    ],
)
def test_scripts_configure_logging(workspace, monkeypatch, script):
    calls = []
    monkeypatch.setattr(log_setup, "configure_logging", lambda: calls.append(script))
    monkeypatch.setattr(sys, "argv", [script])
    runpy.run_module(script, run_name="__main__")
    assert calls == [script]
