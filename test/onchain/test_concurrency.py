import threading
from concurrent.futures import ThreadPoolExecutor

from credential_nft.offchain.util import sign_nonce
from credential_nft.onchain.errors import ReplayedNonce

N_THREADS = 8


def test_concurrent_replay_mints_once(contract, gateway, alice):
    signature = sign_nonce(gateway, "n1")
    barrier = threading.Barrier(N_THREADS)

    def attempt(_):
        barrier.wait()
        try:
            return contract.authorize_and_mint(
                alice.address, alice.address, "", "", "n1", signature
            )
        except ReplayedNonce:
            return None

    with ThreadPoolExecutor(N_THREADS) as pool:
        results = list(pool.map(attempt, range(N_THREADS)))

    assert [r for r in results if r is not None] == [0]
    assert contract.total_supply() == 1


def test_concurrent_mints_get_distinct_ids(contract, gateway, alice):
    signatures = {f"n{i}": sign_nonce(gateway, f"n{i}") for i in range(N_THREADS)}
    barrier = threading.Barrier(N_THREADS)

    def attempt(nonce):
        barrier.wait()
        return contract.authorize_and_mint(
            alice.address, alice.address, "", "", nonce, signatures[nonce]
        )

    with ThreadPoolExecutor(N_THREADS) as pool:
        results = list(pool.map(attempt, signatures))

    assert sorted(results) == list(range(N_THREADS))
    assert contract.balance_of(alice.address) == N_THREADS


def test_readers_see_whole_transactions(contract, admin, alice, bob):
    stop = threading.Event()
    observed = []

    def read():
        while not stop.is_set():
            state = contract.snapshot()
            observed.append(
                (
                    state.token_id_counter,
                    state.ledger.enumeration.total_supply(),
                    len(state.ledger.metadata.records),
                )
            )

    reader = threading.Thread(target=read)
    reader.start()
    try:
        for _ in range(20):
            contract.batch_admin_mint(
                admin.address, [alice.address, bob.address], ["", ""], ["", ""]
            )
    finally:
        stop.set()
        reader.join()

    assert observed
    for counter, supply, records in observed:
        assert counter == supply == records
        assert counter % 2 == 0
