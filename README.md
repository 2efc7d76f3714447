# evmcore

Building blocks for an Ethereum virtual machine, in pure Python.

| Module | What it holds |
| --- | --- |
| `evmcore.bits` | `B160` and `B256` fixed-size byte strings with `from_hex`, `to_hex`, `from_int`, `to_int`, `zero` |
| `evmcore.specification` | `SpecId`, the hard forks in order, with `enabled`, `from_name`, `try_from_u8` |
| `evmcore.utilities` | `keccak256`, `create_address`, `create2_address`, hex helpers and constants such as `KECCAK_EMPTY` and `MAX_INITCODE_SIZE` |
| `evmcore.bytecode` | `Bytecode` in raw, checked or analysed state, and `JumpMap` |
| `evmcore.state` | `Account`, `AccountInfo`, `StorageSlot` and the `AccountStatus` flags |
| `evmcore.result` | `Success`, `Revert`, `Halted`, `Log`, halt reasons and the `EVMError` / `InvalidTransaction` exceptions |
| `evmcore.env` | `Env`, `CfgEnv`, `BlockEnv`, `TxEnv` and transaction validation |
| `evmcore.database` | abstract `Database`, `DatabaseCommit`, `StateProvider`, `BlockHashProvider` and `DatabaseComponents` |
| `evmcore.precompile_base` | `Precompile`, `PrecompileError`, `PrecompileErrorKind`, `calc_linear_cost_u32`, `u64_to_b160` |
| `evmcore.secp256k1`, `evmcore.hashes`, `evmcore.identity`, `evmcore.bn128`, `evmcore.blake2` | the precompiled contracts |
| `evmcore.precompiles` | `Precompiles`, the set of precompiles active at each fork, and `PrecompileSpecId` |

The precompiles provided are ECRECOVER (address 1), SHA-256 (2),
RIPEMD-160 (3), identity (4), alt_bn128 addition (6), scalar multiplication
(7) and pairing check (8), and the BLAKE2 `F` compression function (9). The
alt_bn128 operations come in Byzantium and Istanbul gas schedules.

## Installation

```
pip install evmcore
```

To run the test suite:

```
pip install "evmcore[test]"
pytest
```

## Examples

Hashing and address derivation:

```python
from evmcore.bits import B160
from evmcore.utilities import keccak256, create_address

print(keccak256(b"").to_hex())
caller = B160.from_hex("0x" + "11" * 20)
print(create_address(caller, 0).to_hex())
```

Running a precompile by address for a given fork:

```python
from evmcore.precompiles import Precompiles, PrecompileSpecId
from evmcore.precompile_base import u64_to_b160

precompiles = Precompiles.new(PrecompileSpecId.BERLIN)
identity = precompiles.get(u64_to_b160(4))
gas_used, output = identity(b"hello", 100)   # (18, b"hello")
```

A precompile that runs out of gas or receives malformed input raises
`PrecompileError`, whose `kind` tells what went wrong:

```python
from evmcore.precompile_base import PrecompileError, PrecompileErrorKind
from evmcore.hashes import sha256_run

try:
    sha256_run(b"data", 10)
except PrecompileError as err:
    assert err.kind is PrecompileErrorKind.OUT_OF_GAS
```

ECRECOVER is the exception: a malformed or invalid signature gives an empty
output rather than an error.

Validating a transaction against the rules of a fork:

```python
from evmcore.env import Env
from evmcore.specification import SpecId

env = Env()
env.validate_tx(SpecId.LONDON)   # raises InvalidTransaction when a rule is broken
```

## What this package does not do

- It does not execute bytecode: there is no interpreter, gas metering of
  opcodes or transaction runner. The types in `evmcore.result` and
  `evmcore.env` describe inputs and outcomes only.
- `evmcore.database` defines interfaces only; there is no in-memory or
  persistent database to back them. Implement `StateProvider`,
  `BlockHashProvider` or `Database` yourself.
- The big-integer modular exponentiation precompile (address 5) is not
  included, so `Precompiles.berlin()` holds the same contracts as
  `Precompiles.istanbul()`.