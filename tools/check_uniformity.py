"""Quick statistical smoke check for the bounded-integer sampler.

This script is not a full unit-test. It's a quick sanity check that can run
locally to eyeball the chi-square statistic of each generator profile over
bucket counts that straddle the byte, short and word sampling widths.
"""
from bufrng import settings
from bufrng.common.stats import uniformity_report
from bufrng.distributions import RandomGen


def run_check(samples_per_bucket=None):
    check_cfg = settings.SETTINGS.get('check', {})
    buckets = check_cfg.get('buckets', [5, 127, 128, 255, 256])
    per_bucket = samples_per_bucket or check_cfg.get('samples_per_bucket', 20)

    for profile in ('fast', 'secure'):
        rng = RandomGen.create_profile(profile)
        print(f'[{profile}] buffer bytes:', rng.buffer_size_bytes)
        for count in buckets:
            report = uniformity_report(rng, count, per_bucket)
            status = 'ok' if report['passed'] else 'SUSPICIOUS'
            print(f"  buckets={count:>6} chi2={report['chi_square']:>10.1f} "
                  f"df={report['df']:>6} z={report['z']:+6.2f} {status}")

    seeded_a = RandomGen.create_fast(1234)
    seeded_b = RandomGen.create_fast(1234)
    same = [seeded_a.uint32() for _ in range(8)] == [seeded_b.uint32() for _ in range(8)]
    print('seeded fast profile reproducible:', same)

    print('All uniformity quick checks finished')


if __name__ == '__main__':
    run_check()
