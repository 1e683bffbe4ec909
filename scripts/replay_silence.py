#!/usr/bin/env python3
import argparse
import asyncio

import config
from stop_rules import When
from stop_rules.replay_source import WavReplaySource


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a WAV file through the silence stop rule.")
    parser.add_argument("path", help="16-bit WAV recording to replay.")
    parser.add_argument("--ratio", type=float, default=config.SILENCE_THRESHOLD_RATIO,
                        help="Noise floor multiplier counted as silence.")
    parser.add_argument("--duration-ms", type=int, default=config.SILENCE_DURATION_MS,
                        help="Milliseconds of silence before stopping.")
    parser.add_argument("--chunk-ms", type=int, default=config.REPLAY_CHUNK_MS,
                        help="Chunk size handed to the rule.")
    parser.add_argument("--dump", action="store_true", help="Dump the chunks read to a WAV file.")
    parser.add_argument("--debug", action="store_true", help="Log every chunk level.")
    args = parser.parse_args()

    source = WavReplaySource(args.path, chunk_ms=args.chunk_ms, debug=args.debug)
    rule = When.silence_is_detected(args.ratio, args.duration_ms,
                                    dump_enabled=args.dump, debug=args.debug)
    verdict = asyncio.run(rule.enforce_stop(source))
    detector = rule.last_detector

    print(f"Verdict: {'stop' if verdict else 'keep recording'}")
    print(f"Reason: {detector.terminal_reason.value if detector.terminal_reason else 'recording ended'}")
    print(f"Noise floor: {detector.noise_level:.5f}")
    print("Suggested config:")
    print(f"  export SILENCE_THRESHOLD_RATIO={args.ratio}")
    print(f"  export SILENCE_DURATION_MS={args.duration_ms}")


if __name__ == "__main__":
    main()
