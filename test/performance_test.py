import json
import random
import statistics
import string
import time

from tqdm import tqdm

import config
from shamir import ShamirSecretSharing
from shareweave.encoding import decode
from shareweave.ingest import ingest

DIGITS = string.digits + string.ascii_lowercase

def to_base(n, base):
    digits = []
    while True:
        n, r = divmod(n, base)
        digits.append(DIGITS[r])
        if n == 0:
            return "".join(reversed(digits))

def make_batch(rng, k, extra=2, prime=config.Config.FIELD_PRIME):
    """Random degree k-1 polynomial sampled at k + extra points"""
    coefficients = [rng.randrange(prime) for _ in range(k)]
    batch = {"keys": {"k": k}}
    for x in rng.sample(range(1, 10**6), k + extra):
        y = 0
        for coefficient in reversed(coefficients):
            y = (y * x + coefficient) % prime
        base = rng.randint(config.Config.MIN_BASE, config.Config.MAX_BASE)
        batch[str(x)] = {"base": str(base), "value": to_base(y, base)}
    return coefficients[0], batch

class PerformanceTest:
    def __init__(self, seed=2024):
        self.rng = random.Random(seed)
        self.results = {
            "decode": [],
            "ingest": [],
            "recover": []
        }

    def run_decode_tests(self, num_runs=config.Config.PERFORMANCE_SAMPLES):
        """Time base-N decoding of long digit strings"""
        print("\n=== Base-N Decoding Performance ===")
        times = []
        for _ in tqdm(range(num_runs)):
            base = self.rng.randint(2, 36)
            value = "".join(self.rng.choice(DIGITS[:base]) for _ in range(256))
            start = time.perf_counter()
            decode(value, base)
            end = time.perf_counter()
            times.append(end - start)
        self.results["decode"] = times
        print(f"Decode: {statistics.mean(times)*1000:.3f} ms avg")

    def run_recovery_tests(self, k=10, num_runs=config.Config.PERFORMANCE_SAMPLES):
        """Time ingestion and interpolation for k-of-n batches"""
        print(f"\n=== Recovery Performance (k={k}) ===")
        ingest_times, recover_times = [], []
        for _ in tqdm(range(num_runs)):
            secret, batch = make_batch(self.rng, k)

            start = time.perf_counter()
            report = ingest(batch)
            ingest_times.append(time.perf_counter() - start)

            shamir = ShamirSecretSharing(threshold=report.k)
            start = time.perf_counter()
            recovered = shamir.recover_secret(report.shares)
            recover_times.append(time.perf_counter() - start)

            if recovered != secret:
                raise AssertionError(f"Recovered {recovered}, expected {secret}")
        self.results["ingest"] = ingest_times
        self.results["recover"] = recover_times
        print(f"Ingest: {statistics.mean(ingest_times)*1000:.3f} ms avg")
        print(f"Recover: {statistics.mean(recover_times)*1000:.3f} ms avg")

    def save_results(self, filename="performance_results.json"):
        with open(filename, "w") as f:
            json.dump(self.results, f, indent=2)
        print(f"Results saved to {filename}")

if __name__ == "__main__":
    tester = PerformanceTest()
    tester.run_decode_tests()
    tester.run_recovery_tests()
    tester.save_results()
