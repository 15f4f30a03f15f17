import os, sys, time, math, logging, threading, requests
from concurrent.futures import ThreadPoolExecutor
from utils import configure_logging, env_float, env_int

log = logging.getLogger("probe")

# --- Probe config ---
SAMPLE_INTERVAL = env_float("SAMPLE_INTERVAL", 0.0)   # 0 = single window, then exit
PROBE_REQUESTS  = env_int("PROBE_REQUESTS", 20)       # per endpoint
PROBE_WORKERS   = env_int("PROBE_WORKERS", 8)
TARGET_URL      = os.getenv("TARGET_URL", "http://lb")
TIMEOUT_S       = env_float("TIMEOUT_S", 2.5)

# path -> exact body served by target_app
EXPECTED = {
    "/": "springboot-nginx-demo ok",
    "/work": "springboot-nginx-demo work done",
}

def percentile(values, pct=95):
    if not values:
        return 0.0
    if not 0 <= pct <= 100:
        raise ValueError(f"pct must be within 0..100, got {pct}")
    vs = sorted(values)
    k = pct / 100.0 * (len(vs) - 1)
    lo = int(math.floor(k))
    hi = int(math.ceil(k))
    if lo == hi:
        return vs[lo]
    return vs[lo] + (k - lo) * (vs[hi] - vs[lo])

def p95(values):
    return percentile(values, 95)

# one Session per pool thread; Session is not shared across threads
_local = threading.local()

def _open_session():
    _local.sess = requests.Session()

def _thread_session():
    sess = getattr(_local, "sess", None)
    if sess is None:
        _open_session()
        sess = _local.sess
    return sess

def probe_once(base_url, path, expected_body, timeout=TIMEOUT_S, sess=None):
    sess = sess or _thread_session()
    t0 = time.perf_counter()
    ok = False
    try:
        r = sess.get(base_url.rstrip("/") + path, timeout=timeout)
        ok = (200 <= r.status_code < 300) and r.text == expected_body
    except requests.RequestException as e:
        log.debug("GET %s failed: %s", path, e)
        ok = False
    dt_ms = (time.perf_counter() - t0) * 1000.0
    return ok, dt_ms

def _summarize(samples):
    lat = [ms for _, ms in samples]
    ok = sum(1 for success, _ in samples if success)
    return {
        "requests": len(lat),
        "success_rate": round(ok / (len(lat) or 1), 3),
        "avg_ms": round((sum(lat) / len(lat)) if lat else 0.0, 1),
        "p95_ms": round(p95(lat), 1),
    }

def run_window(base_url, requests_per_endpoint=PROBE_REQUESTS, workers=PROBE_WORKERS, timeout=TIMEOUT_S):
    if requests_per_endpoint < 1:
        raise ValueError(f"PROBE_REQUESTS must be at least 1, got {requests_per_endpoint}")
    # interleave paths so "/" calls overlap in-flight "/work" calls
    jobs = [path for _ in range(requests_per_endpoint) for path in EXPECTED]
    with ThreadPoolExecutor(max_workers=max(workers, 1), initializer=_open_session) as pool:
        futures = [(path, pool.submit(probe_once, base_url, path, EXPECTED[path], timeout)) for path in jobs]
        results = {path: [] for path in EXPECTED}
        for path, fut in futures:
            results[path].append(fut.result())
    evt = {path: _summarize(samples) for path, samples in results.items()}
    evt["endpoint"] = base_url
    evt["ts"] = time.time()
    return evt

def all_ok(evt):
    return all(evt[path]["success_rate"] == 1.0 for path in EXPECTED)

def main():
    configure_logging()
    while True:
        evt = run_window(TARGET_URL, PROBE_REQUESTS, PROBE_WORKERS, TIMEOUT_S)
        log.info("window: %s", evt)
        if SAMPLE_INTERVAL <= 0:
            return 0 if all_ok(evt) else 1
        time.sleep(SAMPLE_INTERVAL)

if __name__ == "__main__":
    sys.exit(main())
